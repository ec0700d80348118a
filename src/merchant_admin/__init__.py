"""Merchant admin back-office — save reconciliation and operating-hours tooling."""
