"""Lead Packages — service packages and add-ons a lead can express interest in.

Invariants:
    - PACKAGE_DISPLAY_NAMES keys are the only ids accepted in a lead's interestedIn
    - Unknown ids display as themselves
"""

PACKAGE_DISPLAY_NAMES: dict[str, str] = {
    # Website packages
    "core-lite": "🖥️ Core Lite ($500 + $49/mo)",
    "core-starter": "🖥️ Core Starter ($2k + $79/mo)",
    "core-growth": "🖥️ Core Growth ($4k + $179/mo)",
    "core-premium": "🖥️ Core Premium (Custom)",
    # SEO packages
    "seo-starter": "🔍 SEO Starter ($150 + $349/mo)",
    "seo-growth": "🔍 SEO Growth ($300 + $649/mo)",
    "seo-premium": "🔍 SEO Premium ($500 + $1,149/mo)",
    # Development add-ons
    "additional-page-basic": "➕ Additional Page – Basic ($150)",
    "additional-page-service": "➕ Additional Page – Service ($200)",
    "feature-integration": "➕ Feature Integration ($500)",
    # SEO add-ons
    "blog-post": "📝 Blog Post ($75)",
    "citation-submission": "📍 Citation Submission ($150)",
    "city-page": "🏙️ City Page ($200)",
    "competitor-analysis": "🔎 Competitor Analysis ($750)",
    "content-mapping": "🗺️ Content Mapping ($350)",
    "county-page": "🗺️ County Page ($350)",
    "gbp-management": "📍 GBP Management ($300)",
    "hub-page": "🔗 Hub Page ($350)",
    "keyword-research": "🔑 Keyword Research ($250)",
    "monthly-seo-report": "📊 Monthly SEO Report ($249)",
    "seo-page-audit": "🔍 SEO Page Audit ($75)",
    "service-page": "📄 Service Page ($250)",
    # UX/UI add-ons
    "page-audit": "🎨 Page Audit ($75)",
}

VALID_PACKAGE_IDS = frozenset(PACKAGE_DISPLAY_NAMES)


def package_display_name(package_id: str) -> str:
    return PACKAGE_DISPLAY_NAMES.get(package_id, package_id)
