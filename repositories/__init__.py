"""Storage adapters for products, sales and the audit log."""
