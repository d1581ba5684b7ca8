"""Collector job package.

Modules:
- config: RunnerConfig dataclass
- cli: argparse entry point (run / check)
"""
