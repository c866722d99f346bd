"""Built-in sample document, used by ``mdpdf --sample``."""

SAMPLE_MARKDOWN = """\
# Welcome to the Markdown PDF Editor

Markdown to PDF with precise pagination control.

## Features

- **Live Preview**: See your document exactly as it will print
- **Custom Page Sizes**: Configure width, height, and margins
- **Page Delimiters**: Use `---page---` or form feed (\\f) to create page breaks
- **PDF Export**: Every page is captured at twice its screen resolution

---page---

# Getting Started

## Writing Content

Write Markdown in any editor. The preview updates each time the file is rendered.

## Creating Page Breaks

Insert a page break with a line containing only `---page---`.

Or use the form feed character (\\f).

---page---

# Code Examples

## JavaScript

```javascript
function hello(name) {
  console.log(`Hello, ${name}!`);
}
```

## Python

```python
def hello(name):
    print(f"Hello, {name}!")
```

---page---

# Exporting to PDF

1. Choose a page size preset or enter width, height and margin
2. Run `mdpdf export` for a raster PDF of the preview
3. Run `mdpdf print` to use the browser's own print engine

> **Tip**: Both outputs use the same page geometry as the preview.

---page---

# Thank You

**Happy Writing!**
"""
