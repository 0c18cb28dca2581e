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

from fastapi import APIRouter, Depends, HTTPException, Response

from services.editor_session_store import EditorSessionStore, get_session_store

router = APIRouter(prefix="/api/exports", tags=["exports"])


@router.get("/{export_id}")
async def download_export(
    export_id: str,
    store: EditorSessionStore = Depends(get_session_store),
):
    """
    Serves an exported result image as an attachment with the fixed file name
    and the MIME type returned by the model.
    """
    export = store.get_export(export_id)
    if export is None:
        raise HTTPException(status_code=404, detail="Export not found")

    return Response(
        content=export.to_bytes(),
        media_type=export.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{export.file_name}"'},
    )


def export_url(export_id: str) -> str:
    return f"{router.prefix}/{export_id}"
