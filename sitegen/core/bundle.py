"""Bundle assembly - pages, per-page HTML, shared stylesheet and shared script"""
import logging
from typing import Sequence

from sitegen.core.page_document import PageDocument
from sitegen.models.schemas import SiteBundle

logger = logging.getLogger(__name__)

SHARED_SCRIPT = """(function () {
  'use strict';

  function onReady(fn) {
    if (document.readyState !== 'loading') { fn(); } else { document.addEventListener('DOMContentLoaded', fn); }
  }

  onReady(function () {
    // Mobile navigation toggle
    document.querySelectorAll('.nav-toggle').forEach(function (toggle) {
      toggle.addEventListener('click', function () {
        var nav = toggle.closest('nav') || document.querySelector('.site-nav');
        if (!nav) { return; }
        var open = nav.classList.toggle('nav-open');
        toggle.setAttribute('aria-expanded', open ? 'true' : 'false');
      });
    });

    // Header state on scroll
    var header = document.querySelector('header');
    function updateHeader() {
      if (header) { header.classList.toggle('scrolled', window.scrollY > 10); }
    }
    window.addEventListener('scroll', updateHeader, { passive: true });
    updateHeader();

    // Smooth in-page anchors
    document.querySelectorAll('a[href^="#"]').forEach(function (link) {
      link.addEventListener('click', function (event) {
        var id = link.getAttribute('href').slice(1);
        var target = id ? document.getElementById(id) : null;
        if (!target) { return; }
        event.preventDefault();
        target.scrollIntoView({ behavior: 'smooth', block: 'start' });
        var nav = link.closest('.nav-open');
        if (nav) { nav.classList.remove('nav-open'); }
      });
    });

    // Same-bundle page links are reported to a hosting frame
    document.querySelectorAll('a[href]').forEach(function (link) {
      var href = link.getAttribute('href');
      if (!/^(page\\d+|index)\\.html$/.test(href)) { return; }
      link.addEventListener('click', function (event) {
        if (window.parent && window.parent !== window) {
          event.preventDefault();
          window.parent.postMessage({ type: 'navigate', page: href }, '*');
        }
      });
    });
  });
})();
"""


def assemble_bundle(pages: Sequence[PageDocument], css: str, js: str = SHARED_SCRIPT) -> SiteBundle:
    """
    Serialize pages in bundle order and attach the shared assets.

    pages[i] is always the filename of html[i].
    """
    ordered = sorted(pages, key=lambda page: page.index)
    bundle = SiteBundle(
        pages=[page.filename for page in ordered],
        html=[page.render() for page in ordered],
        css=css,
        js=js,
    )
    logger.info(f"[Bundle] ✓ Assembled | pages: {bundle.pages} | css_length: {len(css)} chars")
    return bundle
