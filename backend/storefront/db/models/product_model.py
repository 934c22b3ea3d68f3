# backend/storefront/db/models/product_model.py
from sqlalchemy import Column, Integer, String, Text, Numeric, BigInteger, JSON

from storefront.db.database import Base

class Product(Base):
    __tablename__ = "products"

    id = Column(String(50), primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    category = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    original_price = Column(Numeric(10, 2), nullable=False)
    offer_price = Column(Numeric(10, 2), nullable=False)
    images = Column(JSON, nullable=False, default=list)
    color_variants = Column(JSON, nullable=True)
    quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(BigInteger, nullable=False)

    def __repr__(self):
        return f"<Product(id={self.id}, title='{self.title}', quantity={self.quantity})>"

    def to_dict(self):
        """Convierte el objeto Product en un diccionario."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "description": self.description,
            "original_price": float(self.original_price) if self.original_price is not None else 0.0,
            "offer_price": float(self.offer_price) if self.offer_price is not None else 0.0,
            "images": list(self.images or []),
            "color_variants": list(self.color_variants) if self.color_variants else None,
            "quantity": self.quantity or 0,
            "created_at": self.created_at or 0,
        }
