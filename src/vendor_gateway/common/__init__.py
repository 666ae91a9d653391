"""
Common Layer - Registry and Factories
=====================================

Structure:
    common/
    ├── factories/      # Adapter factory keyed by provider
    └── registry/       # Vendor registry with capability-gated dispatch
"""
