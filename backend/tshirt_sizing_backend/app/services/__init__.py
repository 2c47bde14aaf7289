"""Service layer: board store, lifecycle operations, realtime fan-out."""
