"""An FTS5-backed document store with search, listing and editing."""