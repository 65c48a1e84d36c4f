"""Day-file storage: fingerprints, the append-only log store and the duplicate guard."""
