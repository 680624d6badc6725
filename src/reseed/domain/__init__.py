"""Domain layer: seed records, schema facts and the reconciliation engine."""
