"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- commands/  → Write operations: store mutation, then event publish
- queries/   → Read operations
- dto/       → Pydantic models for API input/output
- common/    → Shared interfaces (Command, Query base classes)

Rules:
- Depends on domain and services only
- No HTTP/framework code here
"""
