# File: sitemap_scout/sitemap/parser.py
"""sitemap_scout.sitemap.parser: Разбор sitemap.xml и извлечение URL."""

from __future__ import annotations

from typing import List

from lxml import etree


def parse_sitemap(xml_content: str, *, strict: bool = False) -> List[str]:
    """Разбирает XML content sitemap и возвращает список URL из тегов <loc>.

    Args:
        xml_content: строка с содержимым sitemap.xml.
        strict: если True, некорректный XML вызывает ``etree.XMLSyntaxError``
            вместо попытки восстановления.

    Returns:
        Список URL, найденных в <loc> тегах, в порядке документа.

    Пример:
    ```python
    from sitemap_scout.sitemap.parser import parse_sitemap

    with open('sitemap.xml', encoding='utf-8') as f:
        content = f.read()
    urls = parse_sitemap(content)
    print(urls)
    ```
    """
    parser = etree.XMLParser(ns_clean=True, recover=not strict, resolve_entities=False)
    root = etree.fromstring(xml_content.encode("utf-8"), parser=parser)
    if root is None:
        return []
    locs = root.findall(".//{*}loc")
    return [loc.text.strip() for loc in locs if loc.text]
