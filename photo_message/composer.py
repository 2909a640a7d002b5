from dataclasses import dataclass


@dataclass(frozen=True)
class OutboundMessage:
    to: str
    from_: str
    body: str


def build_body(event: dict) -> str:
    return "\n".join(
        [
            f"Hello {event['photographer']['name']}!",
            "Please snap a pic of:",
            f"  {event['data']['name']}",
        ]
    )


def compose(event: dict, sender: str) -> OutboundMessage:
    """
    Build the SMS asking the assigned photographer to shoot the product.
    Missing event fields raise KeyError.
    """
    return OutboundMessage(
        to=event["photographer"]["phone"],
        from_=sender,
        body=build_body(event),
    )
