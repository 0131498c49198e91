from __future__ import annotations

import logging
from dataclasses import asdict
from html import escape
from typing import Callable, Dict, Mapping
from urllib.parse import quote

from flask import Flask, jsonify, request
from PIL import Image

from .config import SETTINGS, configure_logging
from .errors import FilterPlayError
from .infrastructure.cache import CACHE, last_good_png, remember_last_good
from .infrastructure.network import FETCHER
from .infrastructure.responses import encode_png, send_png, send_png_bytes
from .infrastructure.samples import pick_sample
from .processing.buffer import PixelBuffer
from .processing.decorate import gallery
from .processing.dither import Dither, apply_dither
from .processing.filters import KERNELS, apply_filter, build_kernel
from .processing.pipeline import EXAMPLE_PRESETS, parse_steps, render_examples, run_steps

APP_VERSION = "1.0.0"

LOGGER = logging.getLogger(__name__)

# Query arguments consumed by source resolution rather than by a kernel.
SOURCE_ARGS = ("source_url",)

Producer = Callable[[Image.Image], Image.Image]


def load_source(args: Mapping[str, str]) -> Image.Image:
    """Fetch the requested source, falling back to a random local sample."""

    source_url = args.get("source_url") or SETTINGS.source_url
    if source_url:
        return FETCHER.fetch_source(source_url)
    return pick_sample(SETTINGS.sample_dir)


def kernel_params(args: Mapping[str, str]) -> Dict[str, str]:
    return {key: value for key, value in args.items() if key not in SOURCE_ARGS}


def _bad_request(exc: Exception):
    LOGGER.warning("Rejected %s: %s", request.full_path, exc)
    return (str(exc), 400)


def _render(producer: Producer):
    key = request.full_path
    cached = CACHE.get(key)
    if cached:
        return send_png_bytes(cached)

    try:
        src = load_source(request.args)
    except Exception as exc:  # pragma: no cover - runtime fallback path
        LOGGER.warning("Source unavailable for %s: %s", key, exc)
        cached = last_good_png()
        if cached:
            return send_png_bytes(cached)
        return (f"Source Error: {exc}", 500)

    try:
        out = producer(src)
    except FilterPlayError as exc:
        return _bad_request(exc)

    data = encode_png(out)
    CACHE.put(key, data)
    remember_last_good(data)
    return send_png_bytes(data)


def create_app() -> Flask:
    configure_logging()
    app = Flask(__name__)

    @app.route("/filter/<name>")
    def filter_image(name: str):
        try:
            kernel = build_kernel(name, **kernel_params(request.args))
        except FilterPlayError as exc:
            return _bad_request(exc)
        return _render(lambda src: apply_filter(PixelBuffer.from_image(src), kernel).to_image())

    @app.route("/dither")
    def dither_image():
        try:
            method = Dither.parse(request.args.get("method") or SETTINGS.dither_method)
        except FilterPlayError as exc:
            return _bad_request(exc)
        return _render(lambda src: apply_dither(PixelBuffer.from_image(src), method).to_image())

    @app.route("/render")
    def render_chain():
        steps = request.args.get("steps", "")
        try:
            parsed = parse_steps(steps, default_method=SETTINGS.dither_method)
        except FilterPlayError as exc:
            return _bad_request(exc)
        return _render(lambda src: run_steps(PixelBuffer.from_image(src), parsed).to_image())

    @app.route("/examples")
    def examples():
        return _render(
            lambda src: gallery(render_examples(src), ratio=SETTINGS.thumbnail_ratio)
        )

    @app.route("/raw")
    def raw():
        try:
            return send_png(load_source(request.args))
        except Exception as exc:  # pragma: no cover - runtime fallback path
            return (str(exc), 500)

    @app.route("/health")
    def health():
        return jsonify(
            ok=True,
            version=APP_VERSION,
            dither_method=SETTINGS.dither_method,
            kernels=sorted(KERNELS),
        )

    @app.route("/settings")
    def settings_view():
        return jsonify(asdict(SETTINGS))

    @app.route("/")
    def index():
        endpoints = [
            ("Example Gallery", "/examples", "All presets, framed and stacked"),
            ("Dither", f"/dither?method={SETTINGS.dither_method}", "Error diffusion to black and white"),
            ("Invert", "/filter/invert", "Single filter, parameters as query args"),
            ("Raw Source", "/raw", "Original source image"),
            ("Health", "/health", "Service status"),
        ]
        endpoint_items = "".join(
            f'<li><a href="{escape(href)}">{escape(name)}</a> {escape(desc)}</li>'
            for name, href, desc in endpoints
        )
        preset_items = "".join(
            f'<li><a href="/render?steps={quote(steps)}">{escape(name)}</a> '
            f"<code>{escape(steps)}</code></li>"
            for name, steps in EXAMPLE_PRESETS
        )
        methods = ", ".join(method.value for method in Dither)
        kernels = ", ".join(sorted(KERNELS))
        return (
            "<!doctype html><html><head><title>FilterPlay</title></head><body>"
            f"<h1>FilterPlay {escape(APP_VERSION)}</h1>"
            f"<h2>Endpoints</h2><ul>{endpoint_items}</ul>"
            f"<h2>Presets</h2><ul>{preset_items}</ul>"
            f"<p>Filters: {escape(kernels)}</p>"
            f"<p>Dither methods: {escape(methods)}</p>"
            "</body></html>"
        )

    return app


# Module-level application for WSGI servers (``filterplay.app:app``).
app = create_app()
application = app
