"""Dense complex linear algebra."""

from .matrix import ComplexMatrix, tensor_product, tensor_product_all

__all__ = ["ComplexMatrix", "tensor_product", "tensor_product_all"]
