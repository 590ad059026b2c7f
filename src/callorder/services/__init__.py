"""Services: check orchestration over discovered source files."""
