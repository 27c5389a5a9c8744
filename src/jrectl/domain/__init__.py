"""Pure domain types: errors, module names, pipeline states."""
