from .audit_log import AuditLogList, AuditLogRead
from .catalog import NamedList, NamedRead, NamedWrite, TruckList, TruckRead
from .client import ClientList, ClientRead, ClientWrite
from .company import CompanyList, CompanyRead, CompanyWrite
from .config_entry import ConfigList, ConfigRead, ConfigUpdate
from .dispatch import (
    DispatchCreated,
    DispatchList,
    DispatchNumberOverride,
    DispatchPayload,
    DispatchRead,
    DispatchUpdate,
    MaterialLine,
)
from .product import (
    ITBIS_RATES,
    ClientPriceList,
    ClientPriceRead,
    ClientPriceWrite,
    ProductList,
    ProductPrice,
    ProductRead,
    ProductWrite,
)
from .user import LoginRequest, LoginResponse, UserCreate, UserList, UserRead, UserUpdate

__all__ = [
    "AuditLogList",
    "AuditLogRead",
    "ClientList",
    "ClientPriceList",
    "ClientPriceRead",
    "ClientPriceWrite",
    "ClientRead",
    "ClientWrite",
    "CompanyList",
    "CompanyRead",
    "CompanyWrite",
    "ConfigList",
    "ConfigRead",
    "ConfigUpdate",
    "DispatchCreated",
    "DispatchList",
    "DispatchNumberOverride",
    "DispatchPayload",
    "DispatchRead",
    "DispatchUpdate",
    "ITBIS_RATES",
    "LoginRequest",
    "LoginResponse",
    "MaterialLine",
    "NamedList",
    "NamedRead",
    "NamedWrite",
    "ProductList",
    "ProductPrice",
    "ProductRead",
    "ProductWrite",
    "TruckList",
    "TruckRead",
    "UserCreate",
    "UserList",
    "UserRead",
    "UserUpdate",
]
