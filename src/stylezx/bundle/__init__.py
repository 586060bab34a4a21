"""Final-bundle pruning and asset linking."""

from stylezx.bundle.pruner import inject_stylesheet_link, partition, prune, render_rules

__all__ = ["inject_stylesheet_link", "partition", "prune", "render_rules"]
