"""
datalayer - A pluggable data-access layer.

Consumers depend on narrow capability contracts (``RecordReader``,
``RecordWriter``, ``RecordRemover``); backends implement the contracts
matching what they can really do; the composition root in
``datalayer.wiring`` is the only place that picks a concrete backend.

Example usage:
    from datalayer import build_application

    app = build_application()
    app.records.delete(2)
    app.records.list_records()
"""

__version__ = "0.1.0"
__all__ = [
    "RecordService",
    "RecordReport",
    "build_application",
    "get_storage",
    "__version__",
]


# Lazy imports to avoid loading pydantic/OTel at import time
def __getattr__(name: str):
    if name == "RecordService":
        from datalayer.services import RecordService
        return RecordService
    if name == "RecordReport":
        from datalayer.services import RecordReport
        return RecordReport
    if name == "build_application":
        from datalayer.wiring import build_application
        return build_application
    if name == "get_storage":
        from datalayer.storage import get_storage
        return get_storage
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
