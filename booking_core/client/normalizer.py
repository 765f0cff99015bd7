from typing import Any, Dict

DOCUMENT_ID_KEY = "_id"
ID_KEY = "id"


def normalize_ids(data: Any) -> Any:
    """Renames every `_id` key to `id`, at any depth and inside lists."""
    if isinstance(data, list):
        return [normalize_ids(item) for item in data]
    if isinstance(data, dict):
        return {
            (ID_KEY if key == DOCUMENT_ID_KEY else key): normalize_ids(value)
            for key, value in data.items()
        }
    return data


def normalize_response(body: Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(body, dict) and body.get("data"):
        body = {**body, "data": normalize_ids(body["data"])}
    return body
