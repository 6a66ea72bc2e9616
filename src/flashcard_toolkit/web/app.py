"""
Module: web.app

Purpose:
    Flask API for the flashcard generator.

Routes:
    - GET  /api/session   -> {"unlocked": bool}
    - GET  /api/unlock    -> redeem ?t=<token>, set unlock cookie, redirect
    - POST /api/generate  -> {"flashcards": [...], "fallback": bool}
    - POST /api/pdf       -> duplex-printable flashcards.pdf
    - GET  /healthz

Key Functions:
    - create_app(): Application factory

Dependencies:
    - flask: HTTP layer
    - generation: Card content
    - access: Token store and cookie
    - layout/output: PDF download
"""

from __future__ import annotations

import io
import logging
from typing import Any, Optional

from flask import Flask, jsonify, redirect, request, send_file

from flashcard_toolkit.access import (
    RedeemOutcome,
    TokenStore,
    TokenStoreError,
    is_unlocked,
    unlock_cookie_kwargs,
)
from flashcard_toolkit.cards_io import CardsFileError, cards_from_payload
from flashcard_toolkit.config import AppSettings
from flashcard_toolkit.generation import (
    CardGenerator,
    GeminiClient,
    GenerationError,
    GenerationRequest,
)
from flashcard_toolkit.layout import DEFAULT_CAPACITY, LayoutError, check_page_fits, paginate, resolve_grid
from flashcard_toolkit.output import render_to_bytes

logger = logging.getLogger(__name__)

PDF_FILENAME = "flashcards.pdf"
NOT_AN_OBJECT = "Invalid request: body must be a JSON object"


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    generator: Optional[CardGenerator] = None,
    token_store: Optional[TokenStore] = None,
) -> Flask:
    """
    Build the Flask application.

    Args:
        settings: Service settings (defaults to AppSettings.from_env())
        generator: Card generator (defaults to a GeminiClient-backed one)
        token_store: Unlock token store (defaults to settings.tokens_path)

    Returns:
        Configured Flask app
    """
    settings = settings or AppSettings.from_env()
    generator = generator or CardGenerator(
        GeminiClient(settings.gemini_api_key, model=settings.model)
    )
    token_store = token_store or TokenStore(settings.tokens_path)

    app = Flask(__name__)
    app.config["FLASHCARD_SETTINGS"] = settings

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    @app.get("/api/session")
    def session_status():
        return jsonify({"unlocked": is_unlocked(request.cookies)})

    @app.get("/api/unlock")
    def unlock():
        token = (request.args.get("t") or "").strip()
        try:
            outcome = token_store.redeem(token)
        except TokenStoreError:
            logger.exception("Unlock error")
            return redirect("/?error=server")

        if outcome is not RedeemOutcome.REDEEMED:
            return redirect(f"/?error={outcome.value}")

        response = redirect("/")
        response.set_cookie(**unlock_cookie_kwargs(secure=settings.secure_cookie))
        return response

    @app.post("/api/generate")
    def generate():
        if settings.require_unlock and not is_unlocked(request.cookies):
            return jsonify({"error": "Locked. Redeem an unlock link first."}), 403

        body = _json_body()
        if body is None:
            return jsonify({"error": NOT_AN_OBJECT}), 400
        try:
            gen_request = GenerationRequest(
                topic=str(body.get("topic") or "").strip(),
                grade=str(body.get("grade") or "").strip(),
                num_cards=_to_int(body.get("numCards")),
            )
        except (TypeError, ValueError) as e:
            return jsonify({"error": f"Invalid request: {e}"}), 400

        try:
            result = generator.generate(gen_request)
        except GenerationError as e:
            payload = {"error": str(e)}
            if e.details:
                payload["details"] = e.details
            return jsonify(payload), e.status

        return jsonify({
            "flashcards": [card.to_dict() for card in result.cards],
            "fallback": result.is_fallback,
        })

    @app.post("/api/pdf")
    def download_pdf():
        body = _json_body()
        if body is None:
            return jsonify({"error": NOT_AN_OBJECT}), 400
        try:
            cards = cards_from_payload(body.get("flashcards", []))
        except CardsFileError as e:
            return jsonify({"error": str(e)}), 400
        if not cards:
            return jsonify({"error": "No flashcards to print."}), 400

        capacity = _to_int(body.get("cardsPerPage"), default=DEFAULT_CAPACITY)
        try:
            check_page_fits(settings.layout, resolve_grid(capacity))
        except LayoutError as e:
            logger.error(f"PDF layout misconfigured: {e}")
            return jsonify({"error": "Page layout misconfigured"}), 500

        document = paginate(cards, capacity, settings.layout)
        pdf_bytes = render_to_bytes(document, settings.layout)
        return send_file(
            io.BytesIO(pdf_bytes),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=PDF_FILENAME,
        )

    return app


def _to_int(value: Any, default: Optional[int] = None) -> int:
    """
    Coerce a JSON number or numeric string to int.

    Raises:
        ValueError: If the value is not numeric and no default is given
    """
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        if default is not None:
            return default
        raise ValueError(f"not a number: {value!r}") from None


def _json_body() -> Optional[dict]:
    """
    Request body as a dict.

    Returns an empty dict for a missing or unparsable body and None for
    valid JSON that is not an object.
    """
    body = request.get_json(silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None
