from .record import (
    BazarItem,
    DailyRecord,
    OtherItem,
    UnitLog,
    generate_id,
)
from .record_io import (
    dump_records_json,
    load_records_json,
    record_from_document,
    records_from_documents,
)

__all__ = [
    # models
    "BazarItem",
    "DailyRecord",
    "OtherItem",
    "UnitLog",
    "generate_id",
    # IO helpers
    "dump_records_json",
    "load_records_json",
    "record_from_document",
    "records_from_documents",
]
