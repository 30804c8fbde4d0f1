"""
Test suites package.

Keeps `testsuites` importable for:
  - IDE navigation
  - the programmatic runner (`run_tests.py`)
  - CI/CD module imports

Layout:
  - ui_testing/framework: configuration, session factory, interactions
  - ui_testing/pages: page objects for the Music Tech Shop storefront
  - ui_testing/tests: end-to-end scenarios (opt in with --e2e)
  - unit: offline tests for the framework
"""
