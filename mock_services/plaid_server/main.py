"""Mock Plaid (tartan) API serving JSON stubs, for local runs and in-process tests.

Sandbox users (any institution):
- plaid_test: authenticates straight away
- plaid_mfa_device / plaid_mfa_list / plaid_mfa_questions / plaid_mfa_selections:
  answer with the matching MFA challenge; "tomato" answers every challenge
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from plaid_tartan.config import settings
from plaid_tartan.domain.products import PRODUCTS
from plaid_tartan.infrastructure.observability.logging import setup_logging

setup_logging(settings.log_level)

app = FastAPI(title="Mock Plaid Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/vendor_stub") if os.path.exists("/vendor_stub") else Path(__file__).resolve().parents[2] / "vendor_stub"

ACCESS_TOKEN = "test"
MFA_ANSWER = "tomato"
MFA_USERS = {
    "plaid_mfa_device": "mfa_device",
    "plaid_mfa_list": "mfa_list",
    "plaid_mfa_questions": "mfa_questions",
    "plaid_mfa_selections": "mfa_selections",
}


def load_stub(name: str) -> Dict[str, Any]:
    return json.loads((DATA_DIR / f"{name}.json").read_text())


def product_stub(slug: str) -> Dict[str, Any]:
    if slug not in PRODUCTS:
        raise HTTPException(status_code=404, detail="product not found")
    return load_stub(f"{slug}_success")


async def read_body(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    return json.loads(raw) if raw else {}


def check_client(client_id: Any, secret: Any) -> None:
    if client_id != settings.client_id or secret != settings.secret:
        raise HTTPException(status_code=401, detail="invalid client credentials")


def check_token(access_token: Any) -> None:
    if access_token != ACCESS_TOKEN:
        raise HTTPException(status_code=401, detail="invalid access token")


def error(status_code: int, code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"code": code, "message": message})


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/upgrade")
async def upgrade(request: Request, upgrade_to: str):
    body = await read_body(request)
    check_client(body.get("client_id"), body.get("secret"))
    check_token(body.get("access_token"))
    return product_stub(upgrade_to)


@app.post("/{product}")
async def authenticate(product: str, request: Request):
    body = await read_body(request)
    check_client(body.get("client_id"), body.get("secret"))
    stub = product_stub(product)

    username = body.get("username")
    if username == "plaid_test":
        return stub
    if username in MFA_USERS:
        options = body.get("options") or {}
        # A chosen device skips straight to the code challenge
        name = "mfa_device" if options.get("send_method") else MFA_USERS[username]
        logging.info("MFA challenge issued", extra={"product": product, "challenge": name})
        return JSONResponse(status_code=201, content=load_stub(name))
    return error(402, 1200, "invalid credentials")


@app.patch("/{product}")
async def reauthenticate(product: str, request: Request):
    body = await read_body(request)
    check_client(body.get("client_id"), body.get("secret"))
    check_token(body.get("access_token"))
    stub = product_stub(product)
    if body.get("username") != "plaid_test":
        return error(402, 1200, "invalid credentials")
    return stub


@app.patch("/{product}/step")
async def step(product: str, request: Request):
    body = await read_body(request)
    check_client(body.get("client_id"), body.get("secret"))
    check_token(body.get("access_token"))
    stub = product_stub(product)

    answer = body.get("mfa")
    answers = answer if isinstance(answer, list) else [answer]
    if answers and all(a == MFA_ANSWER for a in answers):
        return stub
    return error(402, 1203, "invalid mfa")


@app.get("/{product}/get")
async def fetch(product: str, request: Request):
    body = await read_body(request)
    check_client(body.get("client_id"), body.get("secret"))
    check_token(body.get("access_token"))
    data = product_stub(product)
    data.pop("access_token", None)
    return data


@app.delete("/{product}")
async def remove_user(product: str, request: Request):
    body = await read_body(request)
    check_client(body.get("client_id"), body.get("secret"))
    check_token(body.get("access_token"))
    product_stub(product)
    return {"message": "Successfully removed from your account"}
