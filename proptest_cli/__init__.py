"""
proptest CLI - property test runner and replay tools

Commands:
- proptest run - Run a property test entry point
- proptest replay inspect/merge - Replay file operations
- proptest version - Show version information
"""

__version__ = "0.1.0"
