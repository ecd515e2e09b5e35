from sqlalchemy.orm import Session

from models.id_sequence import IdSequence


def allocate_id(db: Session, collection: str) -> int:
    """Return the next identifier for a collection.

    Must run inside the collection's writer lock (RecordStore.writing) and in
    the same transaction as the insert, so a failed insert releases nothing
    and a committed one is never handed out again.
    """
    seq = db.get(IdSequence, collection)
    if seq is None:
        seq = IdSequence(collection=collection, last_id=0)
        db.add(seq)

    seq.last_id += 1
    db.flush()
    return seq.last_id


def peek_last_id(db: Session, collection: str) -> int:
    seq = db.get(IdSequence, collection)
    return seq.last_id if seq else 0
