"""Internal helpers shared by the request pipeline. Not public API."""
