"""Business services: catalog, sale recording, reporting and audit."""
