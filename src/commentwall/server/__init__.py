"""Request handling, error mapping and the pounce launchers."""
