"""
Product Catalog Backend: Pydantic Request/Response Schemas
==========================================================

What:  Pydantic models defining the API contract of the product endpoints.
How:   Routes validate parsed request bodies into ProductPayload and
       serialize ORM rows through ProductResponse.

Field handling:
    - Missing fields are None; there is no server-side defaulting
    - Form submissions send every value as a string; `price` is coerced to
      float and an empty string means "no price"
    - Numbers sent for text fields are kept as text ("123")
    - A non-finite price (inf, nan) is rejected; it could not be returned as JSON
    - Unknown fields are ignored
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProductPayload(BaseModel):
    """
    What:  The writable fields of a product as sent by the client.
    Who:   Built by the product routes from a JSON body or form fields.

    The same model serves create and update; update writes every field,
    so omitting one clears it.
    """
    name: Optional[str] = Field(default=None, description="Product name")
    season: Optional[str] = Field(default=None, description="Season the product is available")
    image_url: Optional[str] = Field(
        default=None,
        description="Image URL; replaced by the stored file's URL when an image is uploaded",
    )
    eng_description: Optional[str] = Field(default=None, description="English description")
    thai_description: Optional[str] = Field(default=None, description="Thai description")
    short_description: Optional[str] = Field(default=None, description="Short description")
    price: Optional[float] = Field(
        default=None,
        allow_inf_nan=False,
        description="Unit price; inf and nan are rejected",
    )
    caution: Optional[str] = Field(default=None, description="Caution or allergy note")
    source: Optional[str] = Field(default=None, description="Origin of the product")

    # Numbers sent for text fields are stored as their string form
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @field_validator("price", mode="before")
    @classmethod
    def blank_price_is_none(cls, v: Any) -> Any:
        """Form fields arrive as strings; an empty one carries no price."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_fields(self) -> Dict[str, Any]:
        """All writable columns, including the ones left as None."""
        return self.model_dump()


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(BaseModel):
    """
    What:  Full representation of a stored product.
    Who:   Returned by GET /products, GET /products/{id} and POST /products.
    """
    id: int = Field(description="Server-assigned product identifier")
    name: Optional[str] = None
    season: Optional[str] = None
    image_url: Optional[str] = None
    eng_description: Optional[str] = None
    thai_description: Optional[str] = None
    short_description: Optional[str] = None
    price: Optional[float] = None
    caution: Optional[str] = None
    source: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ChangesResponse(BaseModel):
    """
    What:  Affected-row count of an update or delete.

    `changes` is 0 when no product matched the id; the request still
    succeeds with HTTP 200.
    """
    changes: int = Field(description="Number of rows affected")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Product with ID '42' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    upload_mode: str = Field(description="Image handling mode: multipart, url_only")
    uptime_seconds: float = Field(description="Seconds since service started")
