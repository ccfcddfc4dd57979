"""
Example 01: Serving a Directory of Blobs
=========================================

Demonstrates:
- Loading every file under a directory into a BlobStore
- Mounting BlobServer behind a starlette route
- Conditional (ETag), ranged and ?render=1 requests

Run:
    uv run --with uvicorn python examples/01_serve_directory.py ./some/dir
    curl -i http://127.0.0.1:8000/
    curl -i -H 'Range: bytes=0-99' http://127.0.0.1:8000/raw/<blob id>
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from starlette.applications import Starlette  # noqa: E402
from starlette.requests import Request  # noqa: E402
from starlette.responses import JSONResponse, PlainTextResponse, Response  # noqa: E402
from starlette.routing import Route  # noqa: E402

from blobserve import Blob, BlobNotFoundError, BlobServeConfig, BlobServer, BlobStore  # noqa: E402
from blobserve.http import BlobResponse, blob_request_from  # noqa: E402


def build_app(root: Path) -> Starlette:
    store = BlobStore()
    for path in sorted(p for p in root.rglob("*") if p.is_file()):
        store.add(Blob.from_file(path.relative_to(root).as_posix(), path))

    server = BlobServer(BlobServeConfig.default())

    async def index(request: Request) -> Response:
        return JSONResponse({blob.id: blob.path for blob in store})

    async def raw(request: Request) -> Response:
        try:
            blob = store.get(request.path_params["blob_id"])
        except BlobNotFoundError:
            return PlainTextResponse("Not Found", status_code=404)
        return BlobResponse(server, blob, blob_request_from(request))

    return Starlette(routes=[Route("/", index), Route("/raw/{blob_id}", raw)])


if __name__ == "__main__":
    import uvicorn

    root = Path(sys.argv[1] if len(sys.argv) > 1 else ".").resolve()
    uvicorn.run(build_app(root), host="127.0.0.1", port=8000)
