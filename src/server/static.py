"""Static file fallback for paths that are not articles or feeds."""

from pathlib import Path

from fastapi import HTTPException
from fastapi.responses import FileResponse


def serve_static(content_path: Path, relative_path: str | None) -> FileResponse:
    """Serve a file from the content directory.

    Directories are served through their ``index.html`` when present.

    Args:
        content_path: Content root directory
        relative_path: Request path with the base path removed, or None when
            the request fell outside the base path

    Returns:
        FileResponse for the file

    Raises:
        HTTPException: 404 if the path is outside the root or no file exists
    """
    if relative_path is None:
        raise HTTPException(status_code=404, detail="File not found")

    root = content_path.resolve()
    file_path = (root / relative_path.lstrip("/")).resolve()

    if not file_path.is_relative_to(root):
        raise HTTPException(status_code=404, detail="File not found")

    if file_path.is_dir():
        file_path = file_path / "index.html"

    if not file_path.is_file():
        raise HTTPException(status_code=404, detail="File not found")

    return FileResponse(file_path)
