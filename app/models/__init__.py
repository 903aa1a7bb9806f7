import importlib

from app.models.car import Car
from app.models.sale import Sale
from app.models.user import User


def import_all_models() -> None:
    for module_name in (
        "app.models.car",
        "app.models.sale",
        "app.models.user",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Car",
    "Sale",
    "User",
    "import_all_models",
]
