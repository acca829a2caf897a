"""Hand-authored stylesheets: the fixed design system and the override block appended to every stylesheet"""

DESIGN_SYSTEM_CSS = """:root {
  --color-primary: #1f2937;
  --color-secondary: #3b82f6;
  --color-accent: #f97316;
  --color-bg: #ffffff;
  --color-muted: #f3f4f6;
  --color-text: #111827;
  --radius: 14px;
  --shadow: 0 10px 30px rgba(17, 24, 39, 0.08);
  --space: clamp(3rem, 6vw, 6rem);
}

*, *::before, *::after { box-sizing: border-box; }

body {
  margin: 0;
  color: var(--color-text);
  background: var(--color-bg);
}

.site-header {
  position: sticky;
  top: 0;
  z-index: 50;
  display: flex;
  align-items: center;
  justify-content: space-between;
  padding: 1rem 5vw;
  background: rgba(255, 255, 255, 0.95);
  transition: box-shadow 0.2s ease, padding 0.2s ease;
}

.site-header.scrolled {
  padding: 0.6rem 5vw;
  box-shadow: var(--shadow);
}

.hero {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(280px, 1fr));
  gap: 2.5rem;
  align-items: center;
  padding: var(--space) 5vw;
  background: linear-gradient(135deg, var(--color-muted), #ffffff);
}

.hero h1 { font-size: clamp(2.2rem, 5vw, 3.6rem); line-height: 1.1; margin: 0 0 1rem; }
.hero-media img, .about-media img { border-radius: var(--radius); object-fit: cover; width: 100%; }

section { padding: var(--space) 5vw; }
section h2 { font-size: clamp(1.6rem, 3vw, 2.4rem); margin-top: 0; }

.about-grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(280px, 1fr));
  gap: 2.5rem;
  align-items: center;
}

.grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(240px, 1fr));
  gap: 1.5rem;
}

.card {
  padding: 1.75rem;
  border-radius: var(--radius);
  background: #ffffff;
  box-shadow: var(--shadow);
}

.testimonial { margin: 0; font-style: italic; }
.testimonial cite { display: block; margin-top: 1rem; font-style: normal; font-weight: 600; }

.btn {
  display: inline-block;
  padding: 0.85rem 1.6rem;
  border-radius: 999px;
  font-weight: 600;
  text-decoration: none;
  transition: transform 0.15s ease, background 0.15s ease;
}

.btn-primary { background: var(--color-accent); color: #ffffff; }
.btn-primary:hover { background: #ea580c; transform: translateY(-1px); }
.btn:focus-visible { outline: 3px solid var(--color-secondary); outline-offset: 3px; }
.btn:active { transform: translateY(0); }

.contact { background: var(--color-muted); }
.contact-info { margin: 1.5rem 0; }
.contact-item a { color: var(--color-secondary); }

.site-footer {
  padding: 2rem 5vw;
  background: var(--color-primary);
  color: #e5e7eb;
  text-align: center;
}
"""

# Appended to every stylesheet, generated or not
OVERRIDES_CSS = """
/* ---- overrides ---- */
body {
  font-family: "Inter", system-ui, -apple-system, "Segoe UI", Roboto, sans-serif;
  line-height: 1.6;
  -webkit-font-smoothing: antialiased;
}

h1, h2, h3 { line-height: 1.2; }

img { max-width: 100%; height: auto; display: block; }

main, section { max-width: 100%; overflow-wrap: anywhere; }

.site-nav { display: flex; align-items: center; }
.nav-links { display: flex; gap: 1.5rem; list-style: none; margin: 0; padding: 0; }
.nav-links a { text-decoration: none; color: inherit; font-weight: 500; }
.nav-links a.active { color: var(--color-accent, #f97316); }
.logo { font-weight: 800; font-size: 1.25rem; text-decoration: none; color: inherit; }

.nav-toggle {
  display: none;
  background: none;
  border: 0;
  font-size: 1.6rem;
  cursor: pointer;
}

@media (max-width: 768px) {
  .nav-toggle { display: block; }
  .nav-links {
    display: none;
    position: absolute;
    top: 100%;
    left: 0;
    right: 0;
    flex-direction: column;
    padding: 1rem 5vw;
    background: #ffffff;
    box-shadow: 0 10px 30px rgba(17, 24, 39, 0.08);
  }
  .site-nav.nav-open .nav-links { display: flex; }
}

.hero {
  background-size: cover;
  background-position: center;
  min-height: 60vh;
}
"""
