from .auth_api import AuthApi
from .clients_api import ClientsApi
from .animals_api import AnimalsApi
from .appointments_api import AppointmentsApi
from .dashboard_api import DashboardApi
from .financial_api import FinancialApi
from .notifications_api import NotificationsApi
from .reports_api import ReportsApi
from .reproductive_api import ReproductiveApi
from .sanitary_api import SanitaryApi
from .subscription_api import SubscriptionApi
from .team_api import TeamApi

__all__ = [
    "AuthApi",
    "ClientsApi",
    "AnimalsApi",
    "AppointmentsApi",
    "DashboardApi",
    "FinancialApi",
    "NotificationsApi",
    "ReportsApi",
    "ReproductiveApi",
    "SanitaryApi",
    "SubscriptionApi",
    "TeamApi",
]
