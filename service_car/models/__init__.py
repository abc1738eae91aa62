from .car import Car, CarCreate, CarRead

__all__ = [
    "Car", "CarCreate", "CarRead",
]
