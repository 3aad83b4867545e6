class LabstockError(Exception):
    """Base class for labstock errors."""


class StoreError(LabstockError):
    """Raised when the stock store cannot be read or written."""


class AnalysisError(LabstockError):
    """Raised when a product's history cannot be analyzed."""

    def __init__(self, product_id: str, message: str) -> None:
        super().__init__(f"{product_id}: {message}")
        self.product_id = product_id
