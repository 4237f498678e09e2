"""Interactive arithmetic and boolean expression evaluator."""
