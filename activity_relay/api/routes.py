import json
import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from activity_relay.services.models import ActivityPayload
from activity_relay.services import relay as relay_service

logger = logging.getLogger(__name__)

router = APIRouter()

UNKNOWN_IP = "unknown"
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def extract_client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return UNKNOWN_IP


async def read_payload(request: Request) -> ActivityPayload:
    body = await request.body()
    if not body.strip():
        return ActivityPayload()
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return ActivityPayload(**data)


@router.api_route("/api/log_data", methods=ALL_METHODS)
async def log_data(request: Request):
    if request.method != "POST":
        return JSONResponse(
            {"message": "Kun POST er tillatt"},
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        )

    try:
        relay = relay_service.get_relay()
        payload = await read_payload(request)
        ip = extract_client_ip(request)

        result = await relay.relay(payload, ip)
    except Exception as e:
        logger.exception("Telegram error: %s", e)
        return JSONResponse(
            {"message": f"Serverfeil: {e}"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return {
        "message": "Data sendt til Telegram!",
        "session_uid": result.session_uid,
        "ip_adresse": result.ip_adresse,
    }
