"""L4 Execution — steps that change the host."""
