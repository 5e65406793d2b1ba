"""Web API over an asset browsing session."""
