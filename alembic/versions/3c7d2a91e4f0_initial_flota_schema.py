"""initial_flota_schema

Crea las tablas del dashboard de flota: proveedores, órdenes de trabajo y
sus repuestos, presupuestos, gastos, presupuesto anual, notificaciones,
documentos de vehículos y programas de mantención.

presupuesto.orden_id y los proveedor_id no llevan FK: un presupuesto debe
sobrevivir a la eliminación de su OT.

Revision ID: 3c7d2a91e4f0
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c7d2a91e4f0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'proveedor',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('rut', sa.String(length=12), nullable=True),
        sa.Column('razon_social', sa.String(length=300), nullable=False),
        sa.Column('nombre_comercial', sa.String(length=300), nullable=True),
        sa.Column('contacto', sa.String(length=200), nullable=True),
        sa.Column('telefono', sa.String(length=50), nullable=True),
        sa.Column('email', sa.String(length=200), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint('rut'),
    )

    op.create_table(
        'orden_trabajo',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('titulo', sa.String(length=200), nullable=False),
        sa.Column('patente', sa.String(length=20), nullable=False),
        sa.Column('mecanico', sa.String(length=200), nullable=False),
        sa.Column('proveedor_id', sa.Integer(), nullable=False),
        sa.Column('prioridad', sa.String(length=10), nullable=False, server_default='Media'),
        sa.Column('estado', sa.String(length=20), nullable=False, server_default='Pendiente'),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('fecha_solicitud', sa.Date(), nullable=True),
        sa.Column('conductor', sa.String(length=200), nullable=True),
        sa.Column('total_costo', sa.Numeric(15, 2), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_orden_trabajo_patente', 'orden_trabajo', ['patente'])
    op.create_index('ix_orden_trabajo_proveedor_id', 'orden_trabajo', ['proveedor_id'])
    op.create_index('ix_orden_trabajo_estado', 'orden_trabajo', ['estado'])

    op.create_table(
        'orden_repuesto',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('orden_id', sa.Integer(), sa.ForeignKey('orden_trabajo.id'), nullable=False),
        sa.Column('posicion', sa.Integer(), nullable=False),
        sa.Column('nombre', sa.String(length=200), nullable=False),
        sa.Column('cantidad', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('costo', sa.Numeric(15, 2), nullable=False, server_default='0'),
    )

    op.create_table(
        'presupuesto',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('orden_id', sa.Integer(), nullable=False),
        sa.Column('monto', sa.Numeric(15, 2), nullable=False, server_default='0'),
        sa.Column('estado', sa.String(length=20), nullable=False, server_default='Pendiente'),
        sa.Column('observacion', sa.String(length=400), nullable=False, server_default=''),
        sa.Column('orden_snapshot', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_presupuesto_orden_id', 'presupuesto', ['orden_id'])
    op.create_index('ix_presupuesto_estado', 'presupuesto', ['estado'])

    op.create_table(
        'gasto',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('patente', sa.String(length=20), nullable=False),
        sa.Column('concepto', sa.String(length=500), nullable=False),
        sa.Column('costo', sa.Numeric(15, 2), nullable=False),
        sa.Column('fecha', sa.Date(), nullable=False),
        sa.Column('proveedor_id', sa.Integer(), nullable=True),
        sa.Column('boleta_path', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_gasto_patente', 'gasto', ['patente'])
    op.create_index('ix_gasto_fecha', 'gasto', ['fecha'])

    op.create_table(
        'presupuesto_anual',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('monto', sa.Numeric(15, 2), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'notificacion',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('mensaje', sa.String(length=500), nullable=False),
        sa.Column('leida', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'documento_vehiculo',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('patente', sa.String(length=20), nullable=False),
        sa.Column('tipo', sa.String(length=100), nullable=False),
        sa.Column('responsable', sa.String(length=200), nullable=True),
        sa.Column('vence', sa.Date(), nullable=True),
    )
    op.create_index('ix_documento_vehiculo_patente', 'documento_vehiculo', ['patente'])

    op.create_table(
        'programa_mantencion',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('patente', sa.String(length=20), nullable=False),
        sa.Column('tarea', sa.String(length=200), nullable=False),
        sa.Column('tipo_control', sa.String(length=10), nullable=False, server_default='fecha'),
        sa.Column('proxima_fecha', sa.Date(), nullable=True),
        sa.Column('proximo_km', sa.Integer(), nullable=True),
        sa.Column('km_actual', sa.Integer(), nullable=True),
    )
    op.create_index('ix_programa_mantencion_patente', 'programa_mantencion', ['patente'])


def downgrade() -> None:
    op.drop_index('ix_programa_mantencion_patente', table_name='programa_mantencion')
    op.drop_table('programa_mantencion')
    op.drop_index('ix_documento_vehiculo_patente', table_name='documento_vehiculo')
    op.drop_table('documento_vehiculo')
    op.drop_table('notificacion')
    op.drop_table('presupuesto_anual')
    op.drop_index('ix_gasto_fecha', table_name='gasto')
    op.drop_index('ix_gasto_patente', table_name='gasto')
    op.drop_table('gasto')
    op.drop_index('ix_presupuesto_estado', table_name='presupuesto')
    op.drop_index('ix_presupuesto_orden_id', table_name='presupuesto')
    op.drop_table('presupuesto')
    op.drop_table('orden_repuesto')
    op.drop_index('ix_orden_trabajo_estado', table_name='orden_trabajo')
    op.drop_index('ix_orden_trabajo_proveedor_id', table_name='orden_trabajo')
    op.drop_index('ix_orden_trabajo_patente', table_name='orden_trabajo')
    op.drop_table('orden_trabajo')
    op.drop_table('proveedor')
