"""L0 Data — static defaults and package-manager catalogs."""
