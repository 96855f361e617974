import json

CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PATCH, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Accept",
}


def success(data, status_code: int = 200):
    """Return a standardized success API Gateway response."""
    return {
        "statusCode": status_code,
        "headers": CORS_HEADERS,
        "body": json.dumps({"data": data}, default=str),
    }


def error(code: str, message: str, status_code: int = 400):
    """Return a standardized error API Gateway response."""
    return {
        "statusCode": status_code,
        "headers": CORS_HEADERS,
        "body": json.dumps({"error": {"code": code, "message": message}}),
    }


def attachment(content: str, filename: str):
    """Return a raw JSON document served as a file download."""
    return {
        "statusCode": 200,
        "headers": {
            **CORS_HEADERS,
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
        "body": content,
    }
