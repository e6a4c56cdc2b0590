# sitemap_scout/sitemap/writer.py

"""
Запись sitemap.xml на диск.
"""
from pathlib import Path


def write_sitemap(xml: str, output_path: Path | str) -> Path:
    """
    Сохраняет документ xml по указанному пути в UTF-8.

    Ошибки файловой системы (OSError) не перехватываются.

    :param xml: готовый документ sitemap
    :param output_path: путь к файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8', newline='\n') as f:
        f.write(xml)

    return output
