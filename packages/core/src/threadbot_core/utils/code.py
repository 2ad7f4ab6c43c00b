BINARY_EXTENSIONS = {
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".svg",
    ".ico",
    ".webp",
    ".pdf",
    ".woff",
    ".woff2",
    ".ttf",
    ".otf",
    ".mp4",
    ".mp3",
    ".wav",
    ".zip",
    ".tar",
    ".gz",
    ".7z",
    ".jar",
    ".pyc",
    ".so",
    ".dll",
    ".exe",
}

# Generated files that match almost any keyword search but carry no explanation.
NOISE_FILENAMES = {
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "poetry.lock",
    "Pipfile.lock",
    "Cargo.lock",
    "go.sum",
}


def is_text_file(path: str) -> bool:
    """Return True if the path is worth showing to the model as repository context."""
    name = path.rsplit("/", 1)[-1]
    if name in NOISE_FILENAMES or name.endswith(".min.js"):
        return False
    return not any(name.lower().endswith(ext) for ext in BINARY_EXTENSIONS)
