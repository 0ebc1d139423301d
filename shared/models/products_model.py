"""
Products Model - Pydantic models for vehicle listings.
"""
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Optional


def sanitize_image(image: Optional[str]) -> Optional[str]:
    """Keep only absolute http(s) URLs; anything else is stored as null."""
    if image and image.startswith("http"):
        return image
    return None


class ProductsModel(BaseModel):
    """
    Product (vehicle listing) as stored in MongoDB.

    - title / short_description: canonical names for listing text
    - user_id: owner reference, not validated against users
    - category: free text ("Bike", "Car", "Bicycle", ...)

    Stored documents use camelCase (shortDescription, userId, createdAt).
    """
    id: str
    title: str
    brand: str
    model: Optional[str] = None
    price: Any = Field(description="Listing price as sent by the client")
    image: Optional[str] = None
    category: Optional[str] = None
    short_description: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: dict) -> "ProductsModel":
        """Create model from MongoDB document."""
        return cls(
            id=str(doc["_id"]),
            title=doc.get("title", ""),
            brand=doc.get("brand", ""),
            model=doc.get("model"),
            price=doc.get("price"),
            image=doc.get("image"),
            category=doc.get("category"),
            short_description=doc.get("shortDescription"),
            user_id=doc.get("userId"),
            created_at=doc.get("createdAt"),
        )


class ProductFields(BaseModel):
    """Writable product fields. Aliases are the stored field names."""
    title: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    price: Any = None
    image: Optional[str] = None
    category: Optional[str] = None
    short_description: Optional[str] = Field(default=None, alias="shortDescription")
    user_id: Optional[str] = Field(default=None, alias="userId")

    model_config = {"populate_by_name": True}


class ProductCreate(ProductFields):
    """Body for creating a product. Required fields are checked by the service."""

    def to_document(self) -> dict:
        """Document for insert_one, with the image sanitized."""
        doc = self.model_dump(by_alias=True)
        doc["image"] = sanitize_image(self.image)
        return doc


class ProductUpdate(ProductFields):
    """Body for a partial update; only fields the client sent are written."""

    def to_set_fields(self) -> dict:
        """Fields for a $set, with the image sanitized."""
        data = self.model_dump(by_alias=True, exclude_unset=True)
        if "image" in data:
            data["image"] = sanitize_image(data["image"])
        return data
