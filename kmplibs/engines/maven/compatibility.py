"""Resolve the kotlin-stdlib version a multiplatform release was built against."""

from __future__ import annotations

import structlog

from kmplibs.engines.maven.client import MavenClient
from kmplibs.engines.maven.models import ModuleDescriptor, Variant, VariantDescriptor
from kmplibs.exceptions import CompatibilityError

log = structlog.get_logger("kmplibs.maven")


def find_stdlib_version(
    descriptor: VariantDescriptor, url: str, *, lenient: bool = False
) -> str | None:
    """Return ``version.requires`` of the first kotlin-stdlib dependency.

    Only the descriptor's first variant is inspected. ``None`` means "try the
    next variant". A matching dependency with no ``version`` object raises
    :class:`CompatibilityError` unless *lenient*.
    """
    if not descriptor.variants:
        return None
    dependencies = descriptor.variants[0].dependencies
    if dependencies is None:
        return None

    stdlib = next((dep for dep in dependencies if dep.is_kotlin_stdlib()), None)
    if stdlib is None:
        return None
    if stdlib.version is None:
        if lenient:
            return None
        raise CompatibilityError(url, stdlib.module)
    return stdlib.version.requires


async def resolve_kotlin_version(
    client: MavenClient,
    base_url: str,
    module: ModuleDescriptor,
    variants: list[Variant] | None = None,
    start: int = 0,
    *,
    lenient: bool = False,
) -> str | None:
    """Walk *variants* from *start*, one request at a time, until one resolves.

    Returns ``None`` when every variant is exhausted. Request and decoding
    errors propagate to the caller.
    """
    if start < 0:
        raise ValueError(f"start must be non-negative, got {start}")
    if variants is None:
        variants = module.variants

    for idx in range(start, len(variants)):
        variant = variants[idx]
        if variant.available_at is None:
            log.debug("maven.resolve_variant.skip", variant=variant.name, idx=idx)
            continue

        url = f"{base_url}{module.component.version}/{variant.available_at.url}"
        log.info("maven.resolve_variant", url=url, idx=idx)
        payload = await client.get_json(url)
        descriptor = VariantDescriptor.model_validate(payload)

        version = find_stdlib_version(descriptor, url, lenient=lenient)
        if version is not None:
            return version

    return None
