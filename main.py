# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""FastAPI entry point: serves the export API and mounts the Mesop app."""

import logging
import os
from contextlib import asynccontextmanager

import mesop as me
from fastapi import FastAPI
from fastapi.middleware.wsgi import WSGIMiddleware

from common.analytics import get_logger
from common.error_handling import UnknownHandlerIdFilter
from config.default import Default
from routers import export_router

# Registers the Mesop page.
from workflows.photo_editor import page as photo_editor_page  # noqa: F401

config = Default()
logger = get_logger(__name__)

logging.basicConfig(level=config.LOG_LEVEL)
for logger_name in ("mesop", "mesop.server.server", ""):
    logging.getLogger(logger_name).addFilter(UnknownHandlerIdFilter())


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.has_credential:
        logger.info(f"Photo Edit Studio starting ({config.APP_ENV}), model {config.GEMINI_IMAGE_EDIT_MODEL}")
    else:
        # The page renders only the missing credential notice.
        logger.error("GEMINI_API_KEY is not set; the editor will not initialize.")
    yield


app = FastAPI(lifespan=lifespan)
app.include_router(export_router.router)


@app.get("/healthz")
def healthz():
    return {"status": "ok", "credential_configured": config.has_credential}


app.mount(
    "/",
    WSGIMiddleware(
        me.create_wsgi_app(debug_mode=config.APP_ENV == "local")
    ),
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8080")),
        reload=config.APP_ENV == "local",
    )
