"""Query helpers over Protean DAOs."""

PAGE_SIZE = 100


def fetch_all(query, page_size=PAGE_SIZE) -> list:
    """Every record matching ``query``, read one page at a time.

    A plain ``query.all()`` stops at the DAO's default page of 100 records.
    """
    items = []
    offset = 0
    while True:
        result = query.offset(offset).limit(page_size).all()
        items.extend(result.items)
        offset += page_size
        if offset >= result.total or not result.items:
            return items
