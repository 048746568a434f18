"""
Repository layer for data access.

Each repository owns one key of the key-value store and keeps the
whole serialized value consistent on every write.
"""
