import json

from organic_trace.core.dates import utc_now


def batch_qr_payload(batch_number, product_name, now=None):
    """JSON text encoded in a batch label's QR code."""
    timestamp = (now or utc_now()).isoformat()
    return json.dumps({"batch": batch_number, "product": product_name, "timestamp": timestamp})


def qr_filename(batch_number):
    return "QR-{}.png".format(batch_number)


def product_qr_text(product):
    return "\n".join(
        "{}: {}".format(label, product.get(key) or "")
        for label, key in (
            ("Product Name", "name"),
            ("Category", "category"),
            ("Origin", "origin"),
            ("Certification", "certification"),
            ("Unit", "unit"),
        )
    )
