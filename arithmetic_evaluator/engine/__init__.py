"""Symbol table, evaluator, assignment handling and sessions."""
