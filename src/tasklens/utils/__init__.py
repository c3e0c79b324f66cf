"""Pure helpers: view filters, search, recurrence, logging."""
