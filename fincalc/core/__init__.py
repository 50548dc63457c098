"""Pure calculation functions, one module per calculator."""
