"""xplot core: expression language, tree types, errors and configuration."""
