"""
Core package - Engine contracts and run support.

Contains:
- Integrator / statistics / output contracts
- Error types
- Sweep recorder and progress sink
- Dry-run engine
- YAML run configuration loader
- Logging utilities
"""
