def view_payload(result):
    """Response body for a loaded view; a failed load propagates its RemoteError."""
    if result.error is not None:
        raise result.error
    return {"count": len(result.records), "records": result.records, "options": result.options}
