"""Internal endpoint helpers for the channel API."""
