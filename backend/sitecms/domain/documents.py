from typing import Dict, Optional

from .record_kinds import (
    ABOUT_FEATURE,
    BRAND_LOGO,
    FAQ_ITEM,
    PROCESS_STEP,
    SERVICE_BENEFIT,
    STAT,
    TESTIMONIAL,
    WHY_CHOOSE_US_FEATURE,
)
from .sections import DocumentSchema, SectionSchema

SITE_SETTINGS_KEY = "site_settings"
FAQS_KEY = "faqs"

# ------------------------
# Homepage sections
# ------------------------

HOMEPAGE_SECTIONS = {
    schema.key: schema
    for schema in (
        SectionSchema(
            key="homepageAbout",
            label="About",
            lists={"features": ABOUT_FEATURE},
            scalars={
                "pre_title": "",
                "title": "",
                "description": "",
                "image_url": "",
                "button_text": "",
                "button_link": "",
            },
        ),
        SectionSchema(
            key="homepageServicesBenefits",
            label="Services & benefits",
            lists={"benefits": SERVICE_BENEFIT},
            scalars={"pre_title": "", "title": "", "section_title_icon_url": ""},
        ),
        SectionSchema(
            key="homepageWhyChooseUs",
            label="Why choose us",
            lists={"features": WHY_CHOOSE_US_FEATURE},
            scalars={
                "pre_title": "",
                "title": "",
                "description": "",
                "main_image_url": "",
                "experience_stat_number": "",
                "experience_stat_label": "",
                "contact_button_text": "",
                "contact_button_link": "",
            },
        ),
        SectionSchema(
            key="homepageStatsCounter",
            label="Stats counter",
            lists={"stats": STAT},
        ),
        SectionSchema(
            key="homepageTestimonials",
            label="Testimonials",
            lists={"testimonials": TESTIMONIAL},
            scalars={"pre_title": "", "title": "", "section_title_icon_url": ""},
        ),
        SectionSchema(
            key="homepageBrandLogos",
            label="Brand logos",
            lists={"logos": BRAND_LOGO},
        ),
        SectionSchema(
            key="homepageProcess",
            label="Process",
            lists={"steps": PROCESS_STEP},
            scalars={"pre_title": "", "title": "", "section_title_icon_url": ""},
        ),
        SectionSchema(
            key="homepageCallToAction",
            label="Call to action",
            scalars={
                "title": "",
                "description": "",
                "button_text": "",
                "button_link": "",
                "background_image_url": "",
            },
        ),
        SectionSchema(
            key="homepageContactSection",
            label="Contact",
            scalars={"pre_title": "", "title": "", "section_title_icon_url": ""},
        ),
    )
}

INITIAL_HOMEPAGE = {
    "homepageAbout": {
        "pre_title": "About us",
        "title": "Technology partner for your business",
        "description": "We build, run and support IT systems for small and medium businesses.",
        "button_text": "Learn more",
        "button_link": "/about",
        "features": [
            {"id": "feat-1", "order": 1, "icon": "fas fa-cogs", "title": "Managed IT",
             "description": "Monitoring and maintenance around the clock.", "link": "/services"},
            {"id": "feat-2", "order": 2, "icon": "fas fa-shield-alt", "title": "Security",
             "description": "Audits, hardening and incident response.", "link": "/services"},
        ],
    },
    "homepageServicesBenefits": {
        "pre_title": "Our services",
        "title": "What you get",
        "benefits": [
            {"id": "benefit-1", "order": 1, "icon_class": "fas fa-headset", "title": "Fast support",
             "description": "Tickets answered within the hour.", "link": "/services"},
        ],
    },
    "homepageWhyChooseUs": {
        "pre_title": "Why choose us",
        "title": "Experience you can rely on",
        "experience_stat_number": "10+",
        "experience_stat_label": "Years of experience",
        "contact_button_text": "Contact us",
        "contact_button_link": "/contact",
        "features": [
            {"id": "wcu-feat-1", "order": 1, "icon_class": "fas fa-users", "title": "Expert team",
             "description": "Certified engineers on every project."},
        ],
    },
    "homepageStatsCounter": {
        "stats": [
            {"id": "stat-1", "order": 1, "icon_class": "fas fa-smile", "count": "500+", "label": "Happy clients"},
            {"id": "stat-2", "order": 2, "icon_class": "fas fa-project-diagram", "count": "1200+", "label": "Projects"},
            {"id": "stat-3", "order": 3, "icon_class": "fas fa-award", "count": "15", "label": "Awards"},
        ],
    },
    "homepageTestimonials": {
        "pre_title": "Testimonials",
        "title": "What our clients say",
        "testimonials": [],
    },
    "homepageBrandLogos": {"logos": []},
    "homepageProcess": {
        "pre_title": "How we work",
        "title": "Our process",
        "steps": [
            {"id": "step-1", "order": 1, "step_number": "01", "title": "Consultation",
             "description": "We learn about your goals.", "image_url_seed": "step1", "align_right": False},
            {"id": "step-2", "order": 2, "step_number": "02", "title": "Planning",
             "description": "We design the solution.", "image_url_seed": "step2", "align_right": True},
            {"id": "step-3", "order": 3, "step_number": "03", "title": "Delivery",
             "description": "We build, test and hand over.", "image_url_seed": "step3", "align_right": False},
        ],
    },
    "homepageCallToAction": {
        "title": "Ready to get started?",
        "button_text": "Get a quote",
        "button_link": "/contact",
    },
    "homepageContactSection": {"pre_title": "Contact", "title": "Get in touch"},
}

# ------------------------
# FAQs
# ------------------------

FAQ_SECTIONS = {
    "faqs": SectionSchema(key="faqs", label="FAQs", lists={"items": FAQ_ITEM}),
}

INITIAL_FAQS = {
    "faqs": {
        "items": [
            {"id": "faq-1", "order": 1, "question": "How do I track my order?",
             "answer": "Use the link in your confirmation email.", "category": "Orders", "is_visible": True},
            {"id": "faq-2", "order": 2, "question": "What is your warranty policy?",
             "answer": "All hardware carries a 12 month warranty.", "category": "Warranty", "is_visible": True},
        ],
    },
}

DOCUMENTS: Dict[str, DocumentSchema] = {
    SITE_SETTINGS_KEY: DocumentSchema(
        key=SITE_SETTINGS_KEY,
        label="Homepage settings",
        sections=HOMEPAGE_SECTIONS,
        initial=INITIAL_HOMEPAGE,
        autosave=False,
    ),
    FAQS_KEY: DocumentSchema(
        key=FAQS_KEY,
        label="FAQs",
        sections=FAQ_SECTIONS,
        initial=INITIAL_FAQS,
        autosave=True,
    ),
}


def get_document_schema(key: str) -> Optional[DocumentSchema]:
    return DOCUMENTS.get(key)
