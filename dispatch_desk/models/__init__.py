from .audit_log import AuditLog
from .base import Base
from .client import Client
from .company import Company
from .config_entry import DISPATCH_START_NUMBER_KEY, ConfigEntry
from .dispatch import Dispatch
from .equipment import Equipment, Operator
from .product import ClientPrice, Product
from .truck import Truck
from .user import RoleEnum, User

__all__ = [
    "AuditLog",
    "Base",
    "Client",
    "ClientPrice",
    "Company",
    "ConfigEntry",
    "DISPATCH_START_NUMBER_KEY",
    "Dispatch",
    "Equipment",
    "Operator",
    "Product",
    "RoleEnum",
    "Truck",
    "User",
]
