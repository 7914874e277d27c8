"""TickTick provider: open API client and the search/fetch tools."""
