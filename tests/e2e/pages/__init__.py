"""
Page Object Model (POM) classes for the E2E suites.

This package contains page objects that encapsulate page-specific
locators and interactions. The POM pattern provides:
- Separation of test logic from page details
- Reusable page interactions
- One place to update when the UI changes
"""

from tests.e2e.pages.base_page import BasePage
from tests.e2e.pages.example_dashboard_page import ExampleDashboardPage
from tests.e2e.pages.example_login_page import ExampleLoginPage
from tests.e2e.pages.shipedge_login_page import ShipedgeLoginPage
from tests.e2e.pages.shipedge_orders_page import ShipedgeOrdersPage
from tests.e2e.pages.xenvio_login_page import XenvioLoginPage

__all__ = [
    "BasePage",
    "ExampleDashboardPage",
    "ExampleLoginPage",
    "ShipedgeLoginPage",
    "ShipedgeOrdersPage",
    "XenvioLoginPage",
]
