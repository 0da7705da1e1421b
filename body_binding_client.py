"""Body binding API client.

A small ``requests`` based client for the tutorial controllers.  It
posts text bodies to the ``/request-body-string-v*`` handlers and JSON
bodies to the ``/request-body-json-v*`` handlers and returns
``(data, error)`` tuples in the same way for both:

* :meth:`BodyBindingClient.post_text` sends ``text/plain`` content.
* :meth:`BodyBindingClient.post_json` sends ``application/json`` content.

``data`` is the decoded JSON document for ``application/json``
responses and the response text otherwise.

Run as a script to send the sample payload to every variant::

    python body_binding_client.py --base-url http://localhost:8000
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

JSON_VARIANTS = (1, 2, 3, 4, 5)
STRING_VARIANTS = (1, 2, 3, 4)


class BodyBindingClient:
    """Client for the request body tutorial endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
                Include the API prefix if the server uses one.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _post(
        self, path: str, *, content: bytes, content_type: str
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """POST ``content`` to ``path``.

        Returns:
            A tuple ``(data, error)``.  On failure ``data`` is ``None``
            and ``error`` holds ``status_code`` and ``message``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending POST request to %s (%s bytes)", url, len(content))
            response = self.session.request(
                method="POST",
                url=url,
                data=content,
                headers={"Content-Type": content_type},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail", "") if isinstance(err_json, dict) else str(err_json)
                except ValueError:
                    message = exc.response.text
            message = message or str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        media_type = response.headers.get("Content-Type", "")
        if media_type.startswith("application/json"):
            return response.json(), None
        return response.text, None

    # ------------------------------------------------------------------
    # Controller operations
    # ------------------------------------------------------------------
    def post_text(self, variant: int, text: str) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Send ``text`` to ``/request-body-string-v<variant>``."""
        if variant not in STRING_VARIANTS:
            raise ValueError(f"Unknown string variant: {variant}")
        return self._post(
            f"/request-body-string-v{variant}",
            content=text.encode("utf-8"),
            content_type="text/plain; charset=UTF-8",
        )

    def post_json(self, variant: int, payload: Dict[str, Any]) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Send ``payload`` as JSON to ``/request-body-json-v<variant>``."""
        if variant not in JSON_VARIANTS:
            raise ValueError(f"Unknown JSON variant: {variant}")
        return self._post(
            f"/request-body-json-v{variant}",
            content=json.dumps(payload, separators=(",", ":")).encode("utf-8"),
            content_type="application/json",
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Post the sample payload to every variant and print the replies."""
    parser = argparse.ArgumentParser(description="Exercise the request body tutorial endpoints")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--username", default="hello")
    parser.add_argument("--age", type=int, default=20)
    parser.add_argument("--text", default="hello")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    client = BodyBindingClient(base_url=args.base_url)
    payload = {"username": args.username, "age": args.age}

    failures = 0
    for variant in STRING_VARIANTS:
        data, error = client.post_text(variant, args.text)
        failures += error is not None
        print(f"string-v{variant}: {error or data}")
    for variant in JSON_VARIANTS:
        data, error = client.post_json(variant, payload)
        failures += error is not None
        print(f"json-v{variant}: {error or data}")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
