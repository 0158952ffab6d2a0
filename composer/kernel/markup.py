"""
Storefront Composer Kernel: Block Markup

Mustache templates, one per block type, rendered with chevron by the renderer.
Templates only interpolate; every decision (fallbacks, URL checks, theme
resolution, mode deltas) is made in the renderer's context builders.

Sections are only opened on booleans, dicts and lists. A section opened on a
plain string would let chevron resolve inner keys against str attributes.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Partials
# ---------------------------------------------------------------------------

IMAGE = (
    '<img class="sf-img {{css_class}}" src="{{src}}" alt="{{alt}}" loading="lazy" '
    "onerror=\"this.onerror=null;this.src='{{fallback}}'\">"
)

VIDEO = (
    '<video class="sf-video {{css_class}}" src="{{src}}"'
    '{{#has_poster}} poster="{{poster}}"{{/has_poster}}'
    "{{#autoplay}} autoplay{{/autoplay}}"
    "{{#muted}} muted{{/muted}}"
    "{{#controls}} controls{{/controls}}"
    ' playsinline preload="metadata" '
    'onerror="this.hidden=true;this.nextElementSibling.hidden=false"></video>'
    '<div class="sf-media-placeholder" hidden>{{error_label}}</div>'
)

BUTTON = (
    '{{#static}}<span class="sf-button sf-button-{{variant}}" style="{{style}}">{{label}}</span>{{/static}}'
    '{{^static}}<a class="sf-button sf-button-{{variant}}" href="{{href}}" style="{{style}}">{{label}}</a>{{/static}}'
)

CART_BUTTON = (
    '{{#has_cart_url}}<a class="sf-button sf-add-to-cart" href="{{cart_url}}" '
    'data-product-id="{{id}}" style="{{button_style}}">{{button_label}}</a>{{/has_cart_url}}'
    '{{^has_cart_url}}<button type="button" class="sf-button sf-add-to-cart" '
    'data-product-id="{{id}}" style="{{button_style}}"{{#preview}} disabled{{/preview}}>'
    "{{button_label}}</button>{{/has_cart_url}}"
)

PRICE = (
    '<p class="sf-price"><span class="sf-price-current" style="color:{{theme.primary}}">{{price}}</span>'
    '{{#on_sale}} <s class="sf-price-compare">{{compare_price}}</s>{{/on_sale}}</p>'
)

PRODUCT_CARD = """<article class="sf-product-card" data-product-id="{{id}}">
  <a class="sf-product-media" href="{{url}}">{{#image}}{{>image}}{{/image}}</a>
  <div class="sf-product-body">
    <h3 class="sf-product-name"><a href="{{url}}">{{name}}</a></h3>
    {{#show_price}}{{>price}}{{/show_price}}
    {{#show_rating}}<div class="sf-stars" aria-label="Rated 5 out of 5">&#9733;&#9733;&#9733;&#9733;&#9733;</div>{{/show_rating}}
    {{>cart_button}}
  </div>
</article>"""

PARTIALS: dict[str, str] = {
    "image": IMAGE,
    "video": VIDEO,
    "button": BUTTON,
    "cart_button": CART_BUTTON,
    "price": PRICE,
    "product_card": PRODUCT_CARD,
}


# ---------------------------------------------------------------------------
# Hero blocks
# ---------------------------------------------------------------------------

HERO_BANNER = """<section class="sf-block sf-hero sf-hero-banner" style="{{hero_style}}">
  {{#background}}{{>image}}{{/background}}
  {{#overlay}}<div class="sf-overlay"></div>{{/overlay}}
  <div class="sf-hero-content">
    <h1 class="sf-hero-title" style="color:{{text_color}};font-family:{{theme.heading_font}}">{{title}}</h1>
    {{#has_subtitle}}<p class="sf-hero-subtitle" style="color:{{text_color}}">{{subtitle}}</p>{{/has_subtitle}}
    <div class="sf-actions">{{#primary_button}}{{>button}}{{/primary_button}}{{#secondary_button}}{{>button}}{{/secondary_button}}</div>
  </div>
</section>"""

HERO_SPLIT = """<section class="sf-block sf-hero-split sf-image-{{image_position}}" style="{{section_style}}">
  <div class="sf-container sf-split">
    <div class="sf-split-text">
      <h1 class="sf-hero-title" style="{{heading_style}}">{{title}}</h1>
      <p class="sf-lead">{{subtitle}}</p>
      <div class="sf-actions">{{#primary_button}}{{>button}}{{/primary_button}}</div>
    </div>
    <div class="sf-split-media">{{#image}}{{>image}}{{/image}}</div>
  </div>
</section>"""

HERO_VIDEO = """<section class="sf-block sf-hero sf-hero-video" style="{{hero_style}}">
  {{#video}}{{>video}}{{/video}}
  {{^has_video}}<div class="sf-media-placeholder sf-hero-placeholder">{{video_placeholder}}</div>{{/has_video}}
  {{#overlay}}<div class="sf-overlay"></div>{{/overlay}}
  <div class="sf-hero-content">
    <h1 class="sf-hero-title" style="font-family:{{theme.heading_font}}">{{title}}</h1>
    {{#has_subtitle}}<p class="sf-hero-subtitle">{{subtitle}}</p>{{/has_subtitle}}
    <div class="sf-actions">{{#primary_button}}{{>button}}{{/primary_button}}</div>
  </div>
</section>"""

HERO_MINIMAL = """<section class="sf-block sf-hero-minimal sf-align-{{alignment}}" style="{{section_style}}">
  <div class="sf-container sf-narrow">
    <h1 class="sf-hero-title" style="{{heading_style}}">{{title}}</h1>
    <p class="sf-lead">{{subtitle}}</p>
    {{#primary_button}}<div class="sf-actions">{{>button}}</div>{{/primary_button}}
  </div>
</section>"""


# ---------------------------------------------------------------------------
# Product blocks
# ---------------------------------------------------------------------------

PRODUCT_GRID = """<section class="sf-block sf-product-grid" style="{{section_style}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    {{#has_subtitle}}<p class="sf-subheading">{{subtitle}}</p>{{/has_subtitle}}
    {{#has_products}}<div class="sf-grid sf-cols-{{columns}}">
{{#products}}{{>product_card}}
{{/products}}</div>{{/has_products}}
    {{^has_products}}<p class="sf-empty">No products available</p>{{/has_products}}
  </div>
</section>"""

PRODUCT_CAROUSEL = """<section class="sf-block sf-product-carousel" style="{{section_style}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    {{#has_products}}<div class="sf-carousel" data-autoplay="{{autoplay}}" style="--sf-slides:{{slides_to_show}}">
{{#products}}<div class="sf-slide">{{>product_card}}</div>
{{/products}}</div>
    {{#show_dots}}<div class="sf-dots">{{#dots}}<span class="sf-dot" data-index="{{index}}"></span>{{/dots}}</div>{{/show_dots}}{{/has_products}}
    {{^has_products}}<p class="sf-empty">No products available</p>{{/has_products}}
  </div>
</section>"""

PRODUCT_SHOWCASE = """<section class="sf-block sf-product-showcase" style="{{section_style}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    {{#product}}<div class="sf-showcase sf-split" data-product-id="{{id}}">
      <div class="sf-split-media"><a href="{{url}}">{{#image}}{{>image}}{{/image}}</a></div>
      <div class="sf-split-text">
        <h3 class="sf-product-name"><a href="{{url}}">{{name}}</a></h3>
        {{#show_price}}{{>price}}{{/show_price}}
        {{#show_description}}<p class="sf-product-description">{{description}}</p>{{/show_description}}
        {{>cart_button}}
      </div>
    </div>{{/product}}
    {{^product}}<p class="sf-empty">No products available</p>{{/product}}
  </div>
</section>"""

PRODUCT_CATEGORIES = """<section class="sf-block sf-product-categories" style="{{section_style}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    <div class="sf-grid sf-cols-4">
{{#categories}}<a class="sf-category" href="{{href}}">{{#image}}{{>image}}{{/image}}<h3 class="sf-category-name">{{name}}</h3>{{#has_count}}<p class="sf-muted">{{count}} products</p>{{/has_count}}</a>
{{/categories}}</div>
  </div>
</section>"""


# ---------------------------------------------------------------------------
# Media blocks
# ---------------------------------------------------------------------------

IMAGE_GALLERY = """<section class="sf-block sf-image-gallery" style="{{section_style}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    {{#has_images}}<div class="sf-grid sf-cols-{{columns}} sf-gap-{{spacing}}">
{{#images}}<figure class="sf-gallery-item">{{#has_lightbox}}<a class="sf-lightbox" href="{{src}}">{{/has_lightbox}}{{>image}}{{#has_lightbox}}</a>{{/has_lightbox}}</figure>
{{/images}}</div>{{/has_images}}
    {{^has_images}}{{#preview}}<p class="sf-empty">Add images to build your gallery</p>{{/preview}}{{/has_images}}
  </div>
</section>"""

VIDEO_EMBED = """<section class="sf-block sf-video-embed" style="{{section_style}}">
  <div class="sf-container sf-narrow">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    <div class="sf-video-frame">{{#video}}{{>video}}{{/video}}{{^has_video}}<div class="sf-media-placeholder">{{video_placeholder}}</div>{{/has_video}}</div>
  </div>
</section>"""

IMAGE_TEXT = """<section class="sf-block sf-image-text sf-image-{{image_position}}" style="{{section_style}}">
  <div class="sf-container sf-split">
    <div class="sf-split-media">{{#image}}{{>image}}{{/image}}</div>
    <div class="sf-split-text">
      <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
      <p>{{content}}</p>
      {{#primary_button}}<div class="sf-actions">{{>button}}</div>{{/primary_button}}
    </div>
  </div>
</section>"""

BEFORE_AFTER = """<section class="sf-block sf-before-after" style="{{section_style}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    <div class="sf-grid sf-cols-2">
      <figure class="sf-compare">{{#before}}{{>image}}{{/before}}<figcaption>{{before_label}}</figcaption></figure>
      <figure class="sf-compare">{{#after}}{{>image}}{{/after}}<figcaption>{{after_label}}</figcaption></figure>
    </div>
  </div>
</section>"""


# ---------------------------------------------------------------------------
# Feature and social blocks
# ---------------------------------------------------------------------------

FEATURE_LIST = """<section class="sf-block sf-feature-list" style="{{section_style}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    {{#has_subtitle}}<p class="sf-subheading">{{subtitle}}</p>{{/has_subtitle}}
    <div class="sf-grid sf-cols-3">
{{#features}}<div class="sf-feature"><div class="sf-feature-icon" style="background-color:{{theme.secondary}};color:{{theme.primary}}">{{glyph}}</div><h3>{{title}}</h3><p class="sf-muted">{{description}}</p></div>
{{/features}}</div>
  </div>
</section>"""

ICON_GRID = """<section class="sf-block sf-icon-grid" style="{{section_style}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    <div class="sf-grid sf-cols-{{columns}}">
{{#features}}<div class="sf-feature"><div class="sf-feature-icon" style="background-color:{{theme.secondary}};color:{{theme.primary}}">{{glyph}}</div><h3>{{title}}</h3><p class="sf-muted">{{description}}</p></div>
{{/features}}</div>
  </div>
</section>"""

STATS_COUNTER = """<section class="sf-block sf-stats-counter" style="background-color:{{theme.secondary}};color:{{theme.text}};font-family:{{theme.body_font}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    <div class="sf-grid sf-cols-4">
{{#stats}}<div class="sf-stat"><div class="sf-stat-number" style="{{heading_style}}">{{number}}</div><div class="sf-stat-label">{{label}}</div></div>
{{/stats}}</div>
  </div>
</section>"""

TESTIMONIALS = """<section class="sf-block sf-testimonials" style="{{section_style}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    <div class="sf-grid sf-cols-3">
{{#testimonials}}<figure class="sf-testimonial"><div class="sf-stars" aria-label="Rated {{rating}} out of 5">{{stars}}</div><blockquote>&ldquo;{{comment}}&rdquo;</blockquote><figcaption>{{#avatar}}{{>image}}{{/avatar}}{{^avatar}}<span class="sf-avatar" style="background-color:{{theme.primary}}">{{initial}}</span>{{/avatar}}<span class="sf-author">{{name}}</span></figcaption></figure>
{{/testimonials}}</div>
  </div>
</section>"""

REVIEWS_GRID = """<section class="sf-block sf-reviews-grid" style="{{section_style}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    <div class="sf-grid sf-cols-3">
{{#reviews}}<article class="sf-review"><div class="sf-stars" aria-label="Rated {{rating}} out of 5">{{stars}}</div><p>&ldquo;{{comment}}&rdquo;</p><footer><span class="sf-avatar" style="background-color:{{theme.primary}}">{{initial}}</span><span class="sf-author">{{name}}</span>{{#has_date}}<time class="sf-muted">{{date}}</time>{{/has_date}}</footer></article>
{{/reviews}}</div>
  </div>
</section>"""

SOCIAL_PROOF = """<section class="sf-block sf-social-proof" style="background-color:{{theme.secondary}};color:{{theme.text}};font-family:{{theme.body_font}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    {{#has_subtitle}}<p class="sf-subheading">{{subtitle}}</p>{{/has_subtitle}}
    <div class="sf-logos">
{{#logos}}<div class="sf-logo">{{#logo_image}}{{>image}}{{/logo_image}}{{^logo_image}}<span class="sf-logo-name">{{name}}</span>{{/logo_image}}</div>
{{/logos}}</div>
  </div>
</section>"""


# ---------------------------------------------------------------------------
# Call-to-action and info blocks
# ---------------------------------------------------------------------------

CTA_BANNER = """<section class="sf-block sf-cta-banner" style="background-color:{{bg}};color:{{fg}}">
  <div class="sf-container sf-narrow">
    <h2 class="sf-heading" style="color:{{fg}};font-family:{{theme.heading_font}}">{{title}}</h2>
    <p class="sf-lead" style="color:{{fg}}">{{subtitle}}</p>
    {{#primary_button}}<div class="sf-actions">{{>button}}</div>{{/primary_button}}
  </div>
</section>"""

NEWSLETTER = """<section class="sf-block sf-newsletter" style="background-color:{{theme.primary}};color:#ffffff;font-family:{{theme.body_font}}">
  <div class="sf-container sf-narrow">
    <h2 class="sf-heading" style="color:#ffffff;font-family:{{theme.heading_font}}">{{title}}</h2>
    <p class="sf-lead">{{subtitle}}</p>
    <form class="sf-newsletter-form" method="post" action="{{action}}"{{#preview}} onsubmit="return false"{{/preview}}>
      <input type="email" name="email" required placeholder="{{placeholder}}">
      <button type="submit" class="sf-button" style="background-color:#ffffff;color:{{theme.primary}}">{{button_text}}</button>
    </form>
  </div>
</section>"""

CONTACT_INFO = """<section class="sf-block sf-contact-info" style="{{section_style}}">
  <div class="sf-container">
    <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
    <dl class="sf-grid sf-cols-4 sf-contact">
      <div><dt>Address</dt><dd>{{address}}</dd></div>
      <div><dt>Phone</dt><dd><a href="{{phone_href}}">{{phone}}</a></dd></div>
      <div><dt>Email</dt><dd><a href="{{email_href}}">{{email}}</a></dd></div>
      <div><dt>Hours</dt><dd>{{hours}}</dd></div>
    </dl>
  </div>
</section>"""

ABOUT_SECTION = """<section class="sf-block sf-about-section sf-image-{{image_position}}" style="{{section_style}}">
  <div class="sf-container sf-split">
    <div class="sf-split-media">{{#image}}{{>image}}{{/image}}</div>
    <div class="sf-split-text">
      <h2 class="sf-heading" style="{{heading_style}}">{{title}}</h2>
      <p>{{content}}</p>
    </div>
  </div>
</section>"""


# ---------------------------------------------------------------------------
# Layout blocks
# ---------------------------------------------------------------------------

SPACER = '<div class="sf-block sf-spacer" style="height:{{height}}px;background-color:{{bg}}" aria-hidden="true"></div>'

DIVIDER = (
    '<div class="sf-block sf-divider"><hr style="width:{{width}};border:0;'
    'border-top:{{thickness}}px {{line_style}} {{color}};margin:0 auto"></div>'
)


# ---------------------------------------------------------------------------
# Fallbacks
# ---------------------------------------------------------------------------

UNSUPPORTED = """<section class="sf-block sf-unsupported" data-component-type="{{type}}">
  <div class="sf-notice">
    <strong>Unsupported component type</strong>
    <p>Component type &quot;{{type}}&quot; is not yet supported in page rendering.</p>
  </div>
</section>"""

RENDER_ERROR = """<section class="sf-block sf-render-error" data-component-type="{{type}}">
  <div class="sf-notice">
    <strong>This block could not be displayed</strong>
  </div>
</section>"""

PAGE_CONTENT = """<section class="sf-block sf-page-content" style="{{section_style}}">
  <div class="sf-container sf-narrow">
    <article class="sf-article">
      <h1 class="sf-heading" style="{{heading_style}}">{{title}}</h1>
      <div class="sf-content">{{{content}}}</div>
    </article>
  </div>
</section>"""


TEMPLATES: dict[str, str] = {
    "hero-banner": HERO_BANNER,
    "hero-split": HERO_SPLIT,
    "hero-video": HERO_VIDEO,
    "hero-minimal": HERO_MINIMAL,
    "product-grid": PRODUCT_GRID,
    "product-carousel": PRODUCT_CAROUSEL,
    "product-showcase": PRODUCT_SHOWCASE,
    "product-categories": PRODUCT_CATEGORIES,
    "image-gallery": IMAGE_GALLERY,
    "video-embed": VIDEO_EMBED,
    "image-text": IMAGE_TEXT,
    "before-after": BEFORE_AFTER,
    "feature-list": FEATURE_LIST,
    "icon-grid": ICON_GRID,
    "stats-counter": STATS_COUNTER,
    "testimonials": TESTIMONIALS,
    "reviews-grid": REVIEWS_GRID,
    "social-proof": SOCIAL_PROOF,
    "cta-banner": CTA_BANNER,
    "newsletter": NEWSLETTER,
    "contact-info": CONTACT_INFO,
    "about-section": ABOUT_SECTION,
    "spacer": SPACER,
    "divider": DIVIDER,
}
