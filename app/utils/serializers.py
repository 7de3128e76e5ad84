"""
MongoDB document serialization utilities
"""
from typing import Dict, Any, List, Optional
from bson import Decimal128, ObjectId


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Convert ObjectIds to strings for JSON serialization

    Args:
        doc: MongoDB document dictionary

    Returns:
        Serialized copy of the document, or None if input is None
    """
    if doc is None:
        return None
    return convert_object_ids(doc)


def serialize_docs(docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Serialize a list of MongoDB documents, dropping empty entries."""
    return [serialize_doc(doc) for doc in docs if doc is not None]


def convert_object_ids(value: Any) -> Any:
    """
    Recursively convert ObjectId instances to strings and Decimal128 to Decimal

    Args:
        value: Document, list or scalar that may contain ObjectIds at any level

    Returns:
        Copy of the value with all ObjectIds converted to strings and all
        Decimal128 values converted to Decimal
    """
    if isinstance(value, dict):
        return {key: convert_object_ids(item) for key, item in value.items()}
    if isinstance(value, list):
        return [convert_object_ids(item) for item in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Decimal128):
        return value.to_decimal()
    return value
