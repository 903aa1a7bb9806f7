ROLE_SUPER_ADMIN = "SUPER_ADMIN"
ROLE_SALES_PERSONNEL = "SALES_PERSONNEL"
ROLE_INVENTORY_MANAGER = "INVENTORY_MANAGER"

USER_ROLES = (ROLE_SUPER_ADMIN, ROLE_SALES_PERSONNEL, ROLE_INVENTORY_MANAGER)
INVENTORY_ROLES = (ROLE_SUPER_ADMIN, ROLE_INVENTORY_MANAGER)

SALE_STATUS_PENDING = "PENDING"
SALE_STATUS_COMPLETED = "COMPLETED"
SALE_STATUS_CANCELLED = "CANCELLED"

SALE_STATUSES = (SALE_STATUS_PENDING, SALE_STATUS_COMPLETED, SALE_STATUS_CANCELLED)
