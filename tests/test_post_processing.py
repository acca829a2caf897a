"""
Tests for the per-page and batch post-processing stages

Contact wiring, CTA rewiring and brand/navigation normalization.
"""
from sitegen.core.contact_extractor import ContactInfo
from sitegen.core.contact_wiring import render_contact_block, wire_contacts
from sitegen.core.cta_rewiring import classify_cta, rewire_ctas
from sitegen.core.navigation import DEFAULT_BRAND, nav_labels, normalize_site
from sitegen.core.page_document import PageState, clean_fragment, new_page


def _page(fragment, index=0, filename="page1.html"):
    return new_page(index, filename, fragment)


class TestContactWiring:
    """tel:/wa.me/mailto: anchors and the contact block"""

    def test_rewires_tel_links_to_extracted_number(self):
        page = _page(
            '<section id="contact"><h2>Contact</h2>'
            '<div class="contact-info"><p>Call +1 555 0000</p></div>'
            '<a href="tel:+15550000">+1 555 0000</a></section>'
        )
        contact = ContactInfo(phone="0700 123 456")

        wired = wire_contacts(page, contact)

        tel_links = wired.soup.select('a[href^="tel:"]')
        assert tel_links
        assert all(a["href"] == "tel:0700123456" for a in tel_links)
        assert "+1 555 0000" not in str(wired.soup)
        assert wired.state == PageState.CONTACT_WIRED

    def test_contact_block_replaced_with_canonical_rendering(self):
        page = _page(
            '<section id="contact"><h2>Contact</h2>'
            '<div class="contact-info"><p>Email: fake@example.com</p></div></section>'
        )
        contact = ContactInfo(phone="0700123456", email="real@shop.com")

        wired = wire_contacts(page, contact)

        block = wired.soup.select_one("#contact .contact-info")
        assert "fake@example.com" not in str(block)
        assert block.select_one('a[href="mailto:real@shop.com"]') is not None
        assert block.select_one('a[href="https://wa.me/0700123456"]') is not None
        assert len(wired.soup.select(".contact-info")) == 1

    def test_block_inserted_after_heading_when_missing(self):
        page = _page('<section id="contact"><h2>Reach us</h2><p>We reply fast.</p></section>')
        wired = wire_contacts(page, ContactInfo(email="real@shop.com"))

        heading = wired.soup.select_one("#contact h2")
        assert "contact-info" in heading.find_next_sibling("div")["class"]

    def test_block_goes_to_footer_without_contact_section(self):
        page = _page("<main><section><h1>Welcome</h1></section></main>")
        wired = wire_contacts(page, ContactInfo(phone="0700123456"))

        assert wired.soup.select_one("footer .contact-info") is not None

    def test_missing_field_points_at_default_target(self):
        page = _page('<p><a href="mailto:invented@example.com">Email us</a></p>')
        wired = wire_contacts(page, ContactInfo(phone="0700123456"))

        assert wired.soup.find("a", string="Email us")["href"] == "https://wa.me/0700123456"

    def test_empty_contact_adds_no_block(self):
        page = _page('<a href="tel:123456789">Call</a>')
        wired = wire_contacts(page, ContactInfo())

        assert wired.soup.select_one(".contact-info") is None
        assert wired.soup.find("a")["href"] == "#contact"

    def test_values_are_escaped_in_block(self):
        html = render_contact_block(ContactInfo(address="<b>Main</b> St"))
        assert "<b>" not in html
        assert "&lt;b&gt;" in html

    def test_input_page_is_not_mutated(self):
        page = _page('<a href="tel:111111111">Call</a>')
        wire_contacts(page, ContactInfo(phone="0700123456"))
        assert page.soup.find("a")["href"] == "tel:111111111"
        assert page.state == PageState.DRAFT


class TestCtaRewiring:
    """Placeholder CTAs receive the derived default target"""

    contact = ContactInfo(phone="0700123456")

    def test_placeholder_anchor_rewired_to_whatsapp(self):
        page = _page('<a class="btn" href="#">Order now</a>')
        result = rewire_ctas(page, self.contact)

        anchor = result.soup.find("a")
        assert anchor["href"] == "https://wa.me/0700123456"
        assert anchor["target"] == "_blank"
        assert "noopener" in anchor["rel"]
        assert result.state == PageState.CTA_WIRED

    def test_button_like_marker_counts_as_cta(self):
        page = _page('<a class="hero-cta" href="">Learn more</a>')
        result = rewire_ctas(page, self.contact)
        assert result.soup.find("a")["href"] == "https://wa.me/0700123456"

    def test_non_form_button_becomes_anchor(self):
        page = _page('<div><button class="btn btn-primary" type="button">Book a table</button></div>')
        result = rewire_ctas(page, self.contact)

        assert result.soup.find("button") is None
        anchor = result.soup.find("a")
        assert anchor.get_text() == "Book a table"
        assert anchor["href"] == "https://wa.me/0700123456"
        assert "btn-primary" in anchor["class"]
        assert anchor.get("type") is None

    def test_form_buttons_untouched(self):
        page = _page('<form><input name="email"><button type="submit">Contact us</button></form>')
        result = rewire_ctas(page, self.contact)
        assert result.soup.find("button") is not None

    def test_real_targets_untouched(self):
        page = _page('<a href="page2.html">Contact</a><a href="#">Read our story</a>')
        result = rewire_ctas(page, self.contact)

        anchors = result.soup.find_all("a")
        assert anchors[0]["href"] == "page2.html"
        assert anchors[1]["href"] == "#"

    def test_fallback_targets(self):
        page = _page('<a class="btn" href="#">Get in touch</a>')
        assert rewire_ctas(page, ContactInfo(email="a@b.co")).soup.find("a")["href"] == "mailto:a@b.co"
        assert rewire_ctas(page, ContactInfo()).soup.find("a")["href"] == "#contact"

    def test_idempotent(self):
        page = _page(
            '<a class="btn" href="#">Order now</a>'
            '<button class="cta">Call us</button>'
            '<a href="javascript:void(0)">Donate</a>'
        )
        once = rewire_ctas(page, self.contact)
        twice = rewire_ctas(once, self.contact)
        assert str(twice.soup) == str(once.soup)

    def test_classify_uses_aria_label(self):
        page = _page('<a href="#" aria-label="Call us now"><svg></svg></a>')
        assert classify_cta(page.soup.find("a")) == "phone"


class TestNavigation:
    """Batch brand and navigation normalization"""

    def _site(self):
        fragments = [
            '<header><div class="logo">Acme Studio</div><nav><a href="page1.html">Start</a></nav></header>'
            '<main><h1>Home</h1></main>',
            '<main><h1>Work</h1></main><header><a class="brand" href="#">Other Brand</a>'
            '<nav><ul><li><a href="work.html">Work</a></li></ul></nav></header>',
            '<nav class="top"><a href="#">Menu</a></nav><main><section id="contact"><h1>Contact</h1></section></main>',
        ]
        return [new_page(i, f"page{i + 1}.html", fragment) for i, fragment in enumerate(fragments)]

    def test_nav_labels(self):
        assert nav_labels(1) == ["Home"]
        assert nav_labels(2) == ["Home", "Page 2"]
        assert nav_labels(4) == ["Home", "Page 2", "Page 3", "Contact"]

    def test_identical_navigation_on_every_page(self):
        pages, brand = normalize_site(self._site())

        entry_lists = []
        for page in pages:
            nav = page.soup.select_one("header nav.site-nav")
            entry_lists.append([(a["href"], a.get_text()) for a in nav.select("ul.nav-links a")])
            assert len(page.soup.find_all("nav")) == 1
        assert entry_lists[0] == [("page1.html", "Home"), ("page2.html", "Page 2"), ("page3.html", "Contact")]
        assert all(entries == entry_lists[0] for entries in entry_lists)

    def test_only_current_page_active(self):
        pages, _ = normalize_site(self._site())

        for page in pages:
            active = page.soup.select("a.active")
            assert len(active) == 1
            assert active[0]["href"] == page.filename
            assert active[0]["aria-current"] == "page"

    def test_brand_from_first_page_logo(self):
        pages, brand = normalize_site(self._site())

        assert brand == "Acme Studio"
        for page in pages:
            logo = page.soup.select_one("header .logo")
            assert logo.get_text() == "Acme Studio"
            assert logo["href"] == "page1.html"
        assert "Other Brand" not in str(pages[1].soup)

    def test_explicit_business_name_wins(self):
        pages, brand = normalize_site(self._site(), business_name="Sunrise Bakery")
        assert brand == "Sunrise Bakery"
        assert pages[2].soup.title.string == "Contact – Sunrise Bakery"

    def test_header_first_in_body_and_titles(self):
        pages, _ = normalize_site(self._site())

        for page in pages:
            assert page.soup.body.find(True, recursive=False).name == "header"
            assert page.state == PageState.NAV_NORMALIZED
        assert pages[0].soup.title.string == "Home – Acme Studio"

    def test_generic_brand_fallback(self):
        pages, brand = normalize_site([new_page(0, "page1.html", "<main><p>Hi</p></main>")])
        assert brand == DEFAULT_BRAND
        assert pages[0].soup.select_one("header a.logo").get_text() == DEFAULT_BRAND

    def test_wrapped_menus_removed(self):
        fragments = [
            f'<div class="topbar"><nav><a href="page{i + 1}.html">Mine {i + 1}</a>'
            f'<a href="about-us.html">About</a></nav></div><main><h1>Page {i + 1}</h1></main>'
            for i in range(3)
        ]
        pages, _ = normalize_site([new_page(i, f"page{i + 1}.html", f) for i, f in enumerate(fragments)])

        for page in pages:
            navs = page.soup.find_all("nav")
            assert len(navs) == 1
            assert [a["href"] for a in navs[0].find_all("a")] == ["page1.html", "page2.html", "page3.html"]
            assert "about-us.html" not in str(page.soup)

    def test_footer_and_in_content_navs_kept(self):
        fragment = (
            '<main><nav class="toc"><a href="#menu">Menu</a></nav></main>'
            '<footer><nav class="legal"><a href="#privacy">Privacy</a></nav></footer>'
        )
        pages, _ = normalize_site([new_page(0, "page1.html", fragment)])

        soup = pages[0].soup
        assert soup.select_one("main nav.toc") is not None
        assert soup.select_one("footer nav.legal") is not None
        assert len(soup.select("header nav.site-nav")) == 1


class TestFragmentRepair:
    """Model fragments are reduced to body content"""

    def test_full_document_unwrapped(self):
        raw = (
            "```html\n<!DOCTYPE html><html><head><title>x</title><style>p{}</style></head>"
            "<body><section>Hi</section><script>alert(1)</script></body></html>\n```"
        )
        fragment = clean_fragment(raw)
        assert fragment == "<section>Hi</section>"

    def test_empty_output(self):
        assert clean_fragment("```html\n```") == ""
        assert clean_fragment("   ") == ""
