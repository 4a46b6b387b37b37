from dataclasses import dataclass
from typing import Any, Callable, Dict


@dataclass(frozen=True)
class RecordKind:
    """
    Describes one concrete kind of list entry (step, stat, FAQ ...).

    ``defaults`` receives the order the new record will get, since a few
    kinds derive their default text from it.
    """
    name: str
    prefix: str
    label_field: str
    defaults: Callable[[int], Dict[str, Any]]

    def build(self, order: int) -> Dict[str, Any]:
        return dict(self.defaults(order))

    def label(self, record: Dict[str, Any]) -> str:
        return str(record.get(self.label_field, "") or record.get("id", ""))


PROCESS_STEP = RecordKind(
    name="process_step",
    prefix="step",
    label_field="title",
    defaults=lambda order: {
        "step_number": f"0{order}",
        "title": "New step",
        "description": "Description for the new step.",
        "image_url_seed": f"newStep{order}",
        "align_right": order % 2 == 0,
    },
)

TESTIMONIAL = RecordKind(
    name="testimonial",
    prefix="testimonial",
    label_field="name",
    defaults=lambda order: {
        "name": "Customer name",
        "quote": "Testimonial text...",
        "avatar_url": "",
        "role": "Role",
    },
)

STAT = RecordKind(
    name="stat",
    prefix="stat",
    label_field="label",
    defaults=lambda order: {
        "icon_class": "fas fa-star",
        "count": "100+",
        "label": "New item",
    },
)

BRAND_LOGO = RecordKind(
    name="brand_logo",
    prefix="logo",
    label_field="name",
    defaults=lambda order: {
        "name": "Partner name",
        "logo_url": "",
    },
)

WHY_CHOOSE_US_FEATURE = RecordKind(
    name="why_choose_us_feature",
    prefix="wcu-feat",
    label_field="title",
    defaults=lambda order: {
        "icon_class": "fas fa-star",
        "title": "New feature",
        "description": "Description for the new feature.",
    },
)

ABOUT_FEATURE = RecordKind(
    name="about_feature",
    prefix="feat",
    label_field="title",
    defaults=lambda order: {
        "icon": "fas fa-star",
        "title": "New feature",
        "description": "Description for the new feature.",
        "link": "",
    },
)

SERVICE_BENEFIT = RecordKind(
    name="service_benefit",
    prefix="benefit",
    label_field="title",
    defaults=lambda order: {
        "icon_class": "fas fa-star",
        "title": "New benefit",
        "description": "Short description for the new benefit.",
        "link": "/services",
    },
)

FAQ_ITEM = RecordKind(
    name="faq_item",
    prefix="faq",
    label_field="question",
    defaults=lambda order: {
        "question": "New question?",
        "answer": "",
        "category": "General",
        "is_visible": True,
    },
)

RECORD_KINDS = {
    kind.name: kind
    for kind in (
        PROCESS_STEP,
        TESTIMONIAL,
        STAT,
        BRAND_LOGO,
        WHY_CHOOSE_US_FEATURE,
        ABOUT_FEATURE,
        SERVICE_BENEFIT,
        FAQ_ITEM,
    )
}
