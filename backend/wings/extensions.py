# Overview: Flask extension holding the application's snapshot store.

from __future__ import annotations

import os

from flask import Flask, current_app

from .services.storage import JsonFileBackend, MirroredBackend, SqlMirrorBackend, Store


class StoreExtension:
    """Builds one Store per app from config and keeps it in app.extensions."""

    key = "wings.store"

    def init_app(self, app: Flask) -> Store:
        data_file = app.config["DATA_FILE"]
        if not os.path.isabs(data_file):
            data_file = os.path.join(app.instance_path, data_file)

        backend = JsonFileBackend(data_file)
        mirror_url = app.config.get("MIRROR_URL")
        if mirror_url:
            backend = MirroredBackend(backend, SqlMirrorBackend(mirror_url))

        store = Store(backend)
        store.initialize()
        app.extensions[self.key] = store
        app.logger.info("Snapshot store ready (%s: %s)", backend.name, data_file)
        return store

    def get(self, app: Flask | None = None) -> Store:
        return (app or current_app).extensions[self.key]


store_ext = StoreExtension()


def get_store() -> Store:
    return store_ext.get()
