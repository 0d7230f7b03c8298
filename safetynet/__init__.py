"""
SafetyNet Alerts — emergency dispatch query service.

Architecture:
    safetynet/
    ├── api/             # FastAPI routers (HTTP layer)
    ├── db/              # In-memory record store, per-collection locks
    ├── engine/          # Age resolver, person views, alert queries
    ├── middleware/      # Request context, error handling
    ├── schemas/         # Pydantic records and response DTOs
    └── services/        # CRUD mutators, JSON data loader

Data Flow:
    data.json → Loader → RecordStore → AlertQueryEngine → DTO → JSON
                           ↑
                CRUD services (POST / PUT / DELETE)

Version: 1.0.0
"""

__version__ = "1.0.0"
