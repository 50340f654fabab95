"""
Test suite for the Shipedge E2E automation project.

This package contains:
- unit/: Fast tests for the waiting, selection, reporting and helper modules
- e2e/: Browser tests driven by Playwright against deployed applications
"""
