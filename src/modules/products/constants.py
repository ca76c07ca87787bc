"""Product module constants."""

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

PRODUCT_UPDATED = "Product Successfully Updated"
PRODUCT_DELETED = "Product Successfully Deleted"

NO_FIELDS_TO_UPDATE = "No fields to update"
PRODUCT_NOT_FOUND = "Product not found"

UPDATABLE_FIELDS = ("name", "stock", "price")

# ``Product.stock`` is a uint32 on the wire
MAX_STOCK = 2**32 - 1
