import pytest

from scanner.controllers.scan_controller import ScanController
from scanner.dom.builder import MarkupBuilder

SAMPLE_MARKUP = """
<!doctype html>
<html>
<head>
<title>Sample Product</title>
<link rel="canonical" href="https://example.com/product/123">
<meta name="description" content="Great product">
<meta property="og:title" content="Sample Product">
<script type="application/ld+json">
{
  "@context":"https://schema.org",
  "@type":"Product",
  "name":"Widget",
  "offers": {"@type":"Offer","price":"19.99","priceCurrency":"USD"}
}
</script>
</head>
<body>
<header><h1 id="product-title" class="product__title">Widget</h1></header>
<main>
  <div id="buy-panel" class="buy-panel">
    <button id="buyNowBtn" class="btn btn--primary" data-cta="buy-now">Buy now</button>
  </div>
  <section>
    <h2>Details</h2>
    <p class="is-hidden" style="display:none">Hidden intro</p>
  </section>
</main>
</body>
</html>
""".strip()

SAMPLE_SCRIPT = """
document.getElementById('buyNowBtn').addEventListener('click', onBuy);
document.querySelector('.product__title').textContent;
document.querySelector('#missingNode');
document.querySelector('[data-cta="buy-now"]');
""".strip()


@pytest.fixture
def controller():
    """Een verse ScanController per test."""
    return ScanController()


@pytest.fixture
def builder():
    return MarkupBuilder()


@pytest.fixture
def sample_markup():
    return SAMPLE_MARKUP


@pytest.fixture
def sample_script():
    return SAMPLE_SCRIPT
