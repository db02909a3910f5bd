def serialize_doc(doc):
    """Преобразует ObjectId в str для JSON-совместимости"""
    if not doc:
        return doc
    doc["_id"] = str(doc["_id"])
    return doc


def is_blank(value) -> bool:
    """Обязательное поле не передано или пустое"""
    return value is None or value == ""
