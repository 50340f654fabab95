"""
Browser E2E test package for Shipedge, Xenvio and the example template app.

This package contains Playwright-based browser tests and demonstrates:
- Page Object Model (POM) pattern
- Retry-until-visible clicks for widgets that ignore early clicks
- Tolerating loading indicators that may never render
- Allure metadata, steps and failure artifacts
"""
