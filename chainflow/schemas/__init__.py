from chainflow.schemas.user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    LoginRequest,
    TokenResponse,
    ChangePasswordRequest,
    MessageResponse,
)
from chainflow.schemas.supplier import (
    SupplierCreate,
    SupplierUpdate,
    SupplierPerformanceUpdate,
    SupplierResponse,
    SupplierListResponse,
    SupplierProductsResponse,
    SupplierStats,
    SupplierSummary,
)
from chainflow.schemas.inventory import (
    InventoryCreate,
    InventoryUpdate,
    InventoryAdjustRequest,
    InventoryResponse,
    InventoryListResponse,
    InventoryAlertsResponse,
    InventoryStats,
)
from chainflow.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderStatusUpdate,
    OrderResponse,
    OrderListResponse,
    OrderStats,
)
from chainflow.schemas.analytics import (
    DashboardAnalytics,
    InventoryTrends,
    OrderAnalytics,
    SupplierPerformanceAnalytics,
    FinancialSummary,
)
