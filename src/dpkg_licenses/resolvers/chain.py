"""Resolver chain querying strategies in priority order.

This module implements the first-match resolution algorithm: strategies are
probed in the order they were registered and the first one that returns a
non-empty license wins. Later strategies are never consulted for that
package.
"""

import asyncio
import logging
from typing import AsyncIterator, Optional, Sequence

from dpkg_licenses.constants import DEFAULT_JOBS, DEFAULT_PROBE_TIMEOUT
from dpkg_licenses.exceptions import (
    InvalidInputError,
    ResolverFailedError,
    StrategyExecutionError,
)
from dpkg_licenses.models import (
    ErrorPolicy,
    LicenseResult,
    PackageRecord,
    StrategyDescriptor,
)
from dpkg_licenses.normalize import normalize
from dpkg_licenses.resolvers.base import BaseResolver, validate_package_name

logger = logging.getLogger(__name__)


class ResolverChain:
    """Orchestrates resolver strategies for every package in a report.

    Resolution strategy:
    1. Probe each strategy in list order (position = priority).
    2. The first probe with found=True and a non-empty normalized license
       wins; its strategy is recorded as ``resolved_by``.
    3. If nothing matches, the license is "unknown".

    A strategy execution error or a probe exceeding the timeout aborts the
    package with ResolverFailedError. What that means for the rest of a
    batch is decided by the ErrorPolicy passed to the batch methods.

    Attributes:
        strategies: Strategies in the order they are queried.
        timeout: Per-probe time limit in seconds, or None for no limit.
    """

    def __init__(
        self,
        strategies: Sequence[BaseResolver],
        timeout: Optional[float] = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        """Initialize the chain with an explicit, ordered strategy list.

        Args:
            strategies: Strategies to query, highest priority first.
            timeout: Per-probe time limit in seconds. None disables it.

        Raises:
            ValueError: If two strategies share a name or timeout is not
                positive.
        """
        names = [strategy.name for strategy in strategies]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate strategy names: {', '.join(duplicates)}")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")

        self.strategies = list(strategies)
        self.timeout = timeout

    def describe(self) -> list[StrategyDescriptor]:
        """Return the registration entries of the chain, in query order."""
        return [
            StrategyDescriptor(
                identifier=strategy.name,
                priority=position,
                probe=strategy.probe,
            )
            for position, strategy in enumerate(self.strategies)
        ]

    async def resolve(self, package_name: str) -> LicenseResult:
        """Resolve the license of one package.

        Args:
            package_name: Package identifier.

        Returns:
            LicenseResult from the first strategy that found a license, or
            the "unknown" result if none did.

        Raises:
            InvalidInputError: If package_name is empty or malformed.
            ResolverFailedError: If a strategy failed or timed out.
        """
        validate_package_name(package_name)
        logger.debug("Resolving %s", package_name)

        for strategy in self.strategies:
            try:
                probe = await asyncio.wait_for(
                    strategy.probe(package_name), timeout=self.timeout
                )
            except asyncio.TimeoutError as e:
                raise ResolverFailedError(
                    package_name,
                    strategy.name,
                    f"timed out after {self.timeout:g}s",
                ) from e
            except StrategyExecutionError as e:
                raise ResolverFailedError(package_name, strategy.name, str(e)) from e

            if not probe.found:
                continue

            license_text = normalize(probe.license_text)
            if not license_text:
                logger.debug(
                    "%s reported an empty license for %s, continuing",
                    strategy.name,
                    package_name,
                )
                continue

            logger.debug("%s resolved %s as %s", strategy.name, package_name, license_text)
            return LicenseResult(
                package_name=package_name,
                raw_license=probe.license_text,
                normalized_license=license_text,
                resolved_by=strategy.name,
            )

        logger.debug("No strategy resolved %s", package_name)
        return LicenseResult.unknown(package_name)

    async def resolve_record(
        self, record: PackageRecord, policy: ErrorPolicy = ErrorPolicy.STRICT
    ) -> LicenseResult:
        """Resolve one package record under an error policy.

        Args:
            record: Package to resolve.
            policy: STRICT re-raises failures; LENIENT turns them into an
                "unknown-error" result.

        Returns:
            The resolved (or error-marked) LicenseResult.

        Raises:
            InvalidInputError: In strict mode, if the record name is malformed.
            ResolverFailedError: In strict mode, if resolution failed.
        """
        try:
            return await self.resolve(record.name)
        except (InvalidInputError, ResolverFailedError) as e:
            if policy is ErrorPolicy.STRICT:
                raise
            logger.warning("Could not resolve %s: %s", record.name, e)
            return LicenseResult.failed(record.name, str(e))

    async def stream(
        self,
        records: Sequence[PackageRecord],
        policy: ErrorPolicy = ErrorPolicy.STRICT,
        jobs: int = DEFAULT_JOBS,
    ) -> AsyncIterator[tuple[PackageRecord, LicenseResult]]:
        """Resolve packages concurrently, yielding results in input order.

        At most ``jobs`` packages are resolved at the same time. Results are
        yielded strictly in the order of ``records``; in strict mode the
        first failure (in that order) is raised after all preceding rows
        have been yielded, and outstanding work is cancelled.

        Args:
            records: Packages to resolve.
            policy: Error policy applied to each package.
            jobs: Maximum number of packages resolved concurrently.

        Yields:
            (record, result) pairs in input order.

        Raises:
            ValueError: If jobs is less than 1.
            DpkgLicensesError: In strict mode, the first resolution failure.
        """
        if jobs < 1:
            raise ValueError("jobs must be at least 1")

        semaphore = asyncio.Semaphore(jobs)

        async def resolve_one(record: PackageRecord) -> LicenseResult:
            async with semaphore:
                return await self.resolve_record(record, policy)

        tasks = [asyncio.create_task(resolve_one(record)) for record in records]
        try:
            for record, task in zip(records, tasks):
                yield record, await task
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    async def resolve_batch(
        self,
        records: Sequence[PackageRecord],
        policy: ErrorPolicy = ErrorPolicy.STRICT,
        jobs: int = DEFAULT_JOBS,
    ) -> list[tuple[PackageRecord, LicenseResult]]:
        """Resolve all packages and return the results in input order.

        Args:
            records: Packages to resolve.
            policy: Error policy applied to each package.
            jobs: Maximum number of packages resolved concurrently.

        Returns:
            One (record, result) pair per record.

        Raises:
            DpkgLicensesError: In strict mode, the first resolution failure.
        """
        logger.info("Starting batch resolution of %d packages", len(records))

        results = [pair async for pair in self.stream(records, policy, jobs)]

        resolved = sum(1 for _, result in results if result.resolved_by)
        logger.info("Batch resolution complete: %d/%d resolved", resolved, len(records))
        return results

