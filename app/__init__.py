"""FlowerRate account administration service."""
