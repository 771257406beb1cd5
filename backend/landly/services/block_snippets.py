"""
Jinja2 snippets for the static landing renderer.
All snippets are rendered with autoescape on; context values are plain strings
pulled from AI-produced props, only `sections` and `inline_css` arrive as Markup.
"""

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="{{ lang }}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }}</title>
    {% if description %}<meta name="description" content="{{ description }}">{% endif %}
    <style>{{ inline_css }}</style>
    <link rel="stylesheet" href="{{ asset_prefix }}styles.css">
    <script src="{{ asset_prefix }}analytics.js" defer></script>
</head>
<body class="landing-body">
    <main class="landing" style="{{ theme_style }}">
        {% for section in sections %}
        {{ section }}
        {% endfor %}
    </main>
</body>
</html>
"""

EMPTY_PAGE_SNIPPET = """<section class="landing-section landing-section--empty" data-block="empty"><div class="landing-container"><div class="landing-empty-state" data-placeholder="empty-page">{{ message }}</div></div></section>"""

UNSUPPORTED_SNIPPET = """<section class="landing-section landing-section--unsupported" data-block="{{ block_type }}"><div class="landing-container"><div class="landing-empty-state" data-placeholder="unsupported">Block "{{ block_type }}" is not supported yet</div></div></section>"""

BLOCK_SNIPPETS = {
    "hero": """<section class="landing-section landing-section--hero" data-block="hero"><div class="landing-hero-overlay"></div><div class="landing-container">
<div class="landing-topbar"><span class="landing-brand">{{ brand }}</span><nav class="landing-nav">{% for item in nav_items %}<a href="#">{{ item }}</a>{% endfor %}</nav>
{% if nav_action_text %}<a class="landing-nav-action" href="{{ nav_action_url }}" target="_blank" rel="noopener noreferrer">{{ nav_action_text }}</a>{% endif %}</div>
<div class="landing-hero-grid"><div class="landing-hero-content">
{% if eyebrow %}<span class="landing-eyebrow">{{ eyebrow }}</span>{% endif %}
<h1>{{ headline }}</h1>
{% if subheadline %}<p>{{ subheadline }}</p>{% endif %}
{% if cta_text or secondary_text %}<div class="landing-actions landing-actions--hero">
{% if cta_text %}<a class="landing-button landing-button--primary" data-track="cta_click" href="{{ cta_url }}">{{ cta_text }}</a>{% endif %}
{% if secondary_text %}<a class="landing-button landing-button--ghost" data-track="cta_secondary" href="{{ secondary_url }}">{{ secondary_text }}</a>{% endif %}
</div>{% endif %}
</div>
{% if image %}<div class="landing-hero-media"><div class="landing-hero-media-card"><img src="{{ image }}" alt="{{ image_alt }}" /></div></div>{% endif %}
</div></div></section>""",
    "features": """<section class="landing-section landing-section--features" data-block="features"><div class="landing-container">
<div class="landing-section-header"><h2 class="landing-section-title">{{ title }}</h2></div>
<div class="landing-features__grid">
{% for item in items %}<div class="landing-card landing-feature-card">
{% if item.icon %}<div class="landing-feature-icon"><span>{{ item.icon }}</span></div>{% endif %}
<h3>{{ item.title }}</h3>
{% if item.description %}<p>{{ item.description }}</p>{% endif %}
</div>{% else %}<div class="landing-card landing-feature-card"><p class="landing-empty-state" data-placeholder="features">Add features to show them here</p></div>{% endfor %}
</div></div></section>""",
    "pricing": """<section class="landing-section landing-section--pricing" data-block="pricing"><div class="landing-container">
<div class="landing-section-header"><h2 class="landing-section-title">{{ title }}</h2></div>
<div class="landing-pricing__grid">
{% for plan in plans %}<div class="pricing-card{% if plan.featured %} pricing-card--featured{% endif %}" data-featured="{{ 'true' if plan.featured else 'false' }}">
<div class="pricing-name">{{ plan.name }}</div>
<div class="pricing-price"><span class="pricing-price__value">{{ plan.price }}</span><span class="pricing-price__period">{{ plan.currency }}{% if plan.period %} / {{ plan.period }}{% endif %}</span></div>
<ul class="pricing-features">{% for feature in plan.features %}<li class="pricing-feature"><span class="pricing-feature-icon">✓</span><span>{{ feature }}</span></li>{% endfor %}</ul>
<div class="pricing-action">{% if plan.url %}<a class="landing-button landing-button--secondary" data-track="pay_click" href="{{ plan.url }}" target="_blank" rel="noopener">{{ plan.button_text }}</a>{% else %}<button type="button" class="landing-button landing-button--secondary" data-track="pay_click">{{ plan.button_text }}</button>{% endif %}</div>
</div>{% else %}<div class="landing-card"><div class="landing-empty-state" data-placeholder="pricing">Add pricing plans to the project description</div></div>{% endfor %}
</div></div></section>""",
    "cta": """<section class="landing-section landing-section--cta" data-block="cta"><div class="landing-container">
<div class="landing-section-header"><h2 class="landing-section-title">{{ title }}</h2>{% if description %}<p>{{ description }}</p>{% endif %}</div>
<div class="landing-actions landing-actions--center">
<a class="landing-button landing-button--primary" data-track="cta_click" href="{{ button_url }}">{{ button_text }}</a>
{% if secondary_text %}<a class="landing-button landing-button--ghost" data-track="cta_secondary" href="{{ secondary_url }}">{{ secondary_text }}</a>{% endif %}
</div></div></section>""",
    "testimonials": """<section class="landing-section landing-section--testimonials" data-block="testimonials"><div class="landing-container">
<div class="landing-section-header"><h2 class="landing-section-title">{{ title }}</h2></div>
<div class="landing-testimonials__grid">
{% for item in items %}<div class="landing-card landing-testimonial-card">
{% if item.text %}<p class="landing-testimonial-quote">“{{ item.text }}”</p>{% endif %}
<div class="landing-testimonial-author">{% if item.author %}<strong>{{ item.author }}</strong>{% endif %}{% if item.role %}<span>{{ item.role }}</span>{% endif %}{% if item.rating %}<span class="landing-testimonial-rating">⭐ {{ item.rating }}</span>{% endif %}</div>
</div>{% else %}<div class="landing-card landing-testimonial-card"><p class="landing-empty-state" data-placeholder="testimonials">Add testimonials to build trust</p></div>{% endfor %}
</div></div></section>""",
    "faq": """<section class="landing-section landing-section--faq" data-block="faq"><div class="landing-container">
<div class="landing-section-header"><h2 class="landing-section-title">{{ title }}</h2></div>
<div class="landing-faq__list">
{% for item in items %}<div class="faq-item"><div class="faq-question">{{ item.question }}</div>{% if item.answer %}<div class="faq-answer">{{ item.answer }}</div>{% endif %}</div>{% else %}<div class="faq-item"><div class="landing-empty-state" data-placeholder="faq">Add the questions your customers ask most</div></div>{% endfor %}
</div></div></section>""",
}
