# backend/storefront/db/models/order_model.py
"""
Este archivo contiene el modelo de pedido de la tienda.

Los items se guardan tal y como se enviaron al servicio de pago (lista plana
id/título/cantidad/precio/variante), no como filas relacionadas.
"""

from sqlalchemy import Column, String, Text, Numeric, BigInteger, JSON

from storefront.db.database import Base

class Order(Base):
    __tablename__ = "orders"

    order_id = Column(String(50), primary_key=True, index=True)
    customer_name = Column(String(255), nullable=False)
    items = Column(JSON, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    payment_link = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, default='pending', index=True)
    created_at = Column(BigInteger, nullable=False)

    def __repr__(self):
        return f"<Order(id={self.order_id}, customer='{self.customer_name}', status='{self.status}')>"

    def to_dict(self):
        """Convierte el objeto Order a un diccionario."""
        return {
            "order_id": self.order_id,
            "customer_name": self.customer_name,
            "items": list(self.items or []),
            "total_amount": float(self.total_amount),
            "payment_link": self.payment_link,
            "status": self.status,
            "created_at": self.created_at,
        }
