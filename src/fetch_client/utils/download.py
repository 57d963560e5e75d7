# src/fetch_client/utils/download.py
"""
Сохранение бинарного ответа (BlobResult) на диск.
"""

import os
import time
from pathlib import Path
from typing import Any, Optional, Union


def download_file(
    result: Any,
    directory: Union[str, os.PathLike] = ".",
    filename: Optional[str] = None,
) -> Path:
    """
    Записать данные BlobResult в файл.

    Имя файла: явный filename, иначе result.filename, иначе
    ``download-<epoch ms>``. От имени из заголовка берётся только базовая
    часть, поэтому запись за пределы directory невозможна.

    Args:
        result: BlobResult или объект с атрибутами data/filename
        directory: Каталог назначения (создаётся при отсутствии)
        filename: Имя файла (переопределяет имя из ответа)

    Returns:
        Путь к записанному файлу

    Raises:
        TypeError: data не bytes-like

    Example:
        >>> blob = await client.get("/reports/export")
        >>> path = download_file(blob, "/tmp/reports")
    """
    data = getattr(result, "data", None)
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("Data must be bytes")

    name = filename or getattr(result, "filename", None) or f"download-{int(time.time() * 1000)}"
    # Windows и POSIX разделители
    name = os.path.basename(name.replace("\\", "/"))
    if name in ("", ".", ".."):
        name = f"download-{int(time.time() * 1000)}"

    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)

    path = target_dir / name
    with open(path, "wb") as f:
        f.write(data)

    return path
