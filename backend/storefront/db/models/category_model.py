# backend/storefront/db/models/category_model.py
"""
Se encarga de definir el modelo de categoría de la tienda.
"""

from sqlalchemy import Column, Integer, String, BigInteger
from storefront.db.database import Base

class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True)
    created_at = Column(BigInteger, nullable=False)

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"
