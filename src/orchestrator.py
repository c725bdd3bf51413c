"""
Pipeline Orchestrator.

Wires ingestion, normalization, filtering, analytics and reporting together,
the way the dashboard page feeds its panels.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from src.agents.aggregation import ReviewAggregator
from src.agents.filtering import (
    FilterCriteria,
    category_drill_down,
    default_date_range,
    filter_by_listing,
    filter_reviews,
)
from src.agents.ingestion import IngestionAgent
from src.agents.normalization import ReviewNormalizer
from src.agents.reporting import ALL_LISTINGS_LABEL, ReportGenerator
from src.models.category import get_category
from src.models.insight import CategoryScore, PersistentIssue, SentimentBreakdown
from src.models.review import Review
from src.utils.fields import RawRow
from src.utils.storage import ExportManager

logger = logging.getLogger(__name__)


@dataclass
class DashboardSnapshot:
    """Everything the dashboard shows for one load of data."""
    reviews: List[Review]
    filtered_reviews: List[Review]
    diagnostics: List[str]
    listing_label: str
    sentiment: SentimentBreakdown
    top_issues: List[Tuple[str, int]]
    persistent_issues: List[PersistentIssue]
    category_scores: List[CategoryScore]
    assessment: Optional[str]
    date_range: Optional[Tuple[date, date]]
    listings: List[str] = field(default_factory=list)
    channels: List[str] = field(default_factory=list)
    drill_down: List[Review] = field(default_factory=list)  # Selected category, negative and neutral only
    top_listings: List[Tuple[str, int]] = field(default_factory=list)  # Listings ranked by complaints in the category
    report: Optional[Dict] = None
    exported: List[str] = field(default_factory=list)


class PipelineOrchestrator:
    """
    Orchestrates one dashboard refresh.

    1. Ingestion -> 2. Normalization -> 3. Listing filter + analytics
    -> 4. Working-view filter -> 5. Report + export
    """

    def __init__(
        self,
        output_root: Union[str, Path],
        use_sample_data: bool = False,
        normalizer: Optional[ReviewNormalizer] = None,
        aggregator: Optional[ReviewAggregator] = None
    ):
        """
        Initialize pipeline orchestrator.

        Args:
            output_root: Directory for exported reports and tables
            use_sample_data: Load the built-in demo dataset instead of a file
            normalizer: Review normalizer (default configuration if None)
            aggregator: Review aggregator (default categories if None)
        """
        self.output_root = str(output_root)

        self.ingestion_agent = IngestionAgent(use_sample_data=use_sample_data)
        self.normalizer = normalizer or ReviewNormalizer()
        self.aggregator = aggregator or ReviewAggregator()
        self.report_generator = ReportGenerator(self.aggregator)

        self._exporter: Optional[ExportManager] = None

        logger.info("Pipeline initialized successfully")

    @property
    def exporter(self) -> ExportManager:
        # Created on first export so dry runs leave no directories behind
        if self._exporter is None:
            self._exporter = ExportManager(self.output_root)
        return self._exporter

    def run(
        self,
        csv_path: Union[str, Path, None] = None,
        criteria: Optional[FilterCriteria] = None,
        report_type: Optional[str] = None,
        export: bool = True,
        ingested_at: Optional[str] = None
    ) -> DashboardSnapshot:
        """
        Load data and compute the dashboard.

        Args:
            csv_path: CSV file to load (ignored in sample mode)
            criteria: Working-view filters; criteria.listing also scopes analytics
            report_type: "internal", "external" or None for no report
            export: Write the filtered table and the report to output_root
            ingested_at: Timestamp for rows without a usable date

        Returns:
            DashboardSnapshot

        Raises:
            IngestionError: If the upload is rejected
        """
        # STAGE 1: Ingestion
        rows = self.ingestion_agent.load_rows(csv_path)
        return self.run_rows(rows, criteria, report_type, export, ingested_at)

    def run_rows(
        self,
        rows: List[RawRow],
        criteria: Optional[FilterCriteria] = None,
        report_type: Optional[str] = None,
        export: bool = True,
        ingested_at: Optional[str] = None
    ) -> DashboardSnapshot:
        """Same as run(), starting from rows that are already loaded."""
        criteria = criteria or FilterCriteria()

        # STAGE 2: Normalization
        result = self.normalizer.normalize_batch(rows, ingested_at)
        reviews = result.reviews

        if not reviews:
            logger.warning("No reviews loaded; see diagnostics")
            for line in result.diagnostics:
                logger.warning(line)

        # STAGE 3: Analytics over the selected listing
        listing_reviews = filter_by_listing(reviews, criteria.listing)
        listing_label = (
            ALL_LISTINGS_LABEL if criteria.listing in (None, "", "all") else criteria.listing
        )

        # STAGE 4: Working view
        filtered = filter_reviews(reviews, criteria)
        logger.info(f"Showing {len(filtered)} of {len(reviews)} reviews")

        snapshot = DashboardSnapshot(
            reviews=reviews,
            filtered_reviews=filtered,
            diagnostics=result.diagnostics,
            listing_label=listing_label,
            sentiment=self.aggregator.sentiment_distribution(listing_reviews),
            top_issues=self.aggregator.top_issues(listing_reviews),
            persistent_issues=self.aggregator.persistent_issues(listing_reviews),
            category_scores=self.aggregator.category_scores(listing_reviews),
            assessment=self.aggregator.overall_assessment(listing_reviews, listing_label),
            date_range=default_date_range(reviews),
            listings=self.aggregator.listing_options(reviews),
            channels=self.aggregator.channel_options(reviews),
        )

        # Category drill-down for the analysis panel
        category = get_category(criteria.category) if criteria.category else None
        if category is not None:
            snapshot.drill_down = category_drill_down(listing_reviews, category, criteria.search)
            snapshot.top_listings = self.aggregator.top_listings_for_category(reviews, category)
            logger.info(
                f"Category {category.name}: {len(snapshot.drill_down)} reviews to inspect "
                f"across {len(snapshot.top_listings)} listings"
            )

        # STAGE 5: Report and export
        if report_type:
            snapshot.report = self.report_generator.generate(
                reviews, report_type, listing=criteria.listing
            )

        if export and reviews:
            snapshot.exported.append(self.exporter.save_reviews_table(filtered, "filtered_reviews"))
            if snapshot.report:
                name = f"{report_type}_report"
                snapshot.exported.append(self.exporter.save_report(snapshot.report, name))

        return snapshot


# Design Rationale and Trade-offs:
#
# 1. Why scope analytics by listing but not by the other filters?
#    - Panels describe a listing; the working view narrows the table
#    - Trade-off: Sentiment and search filters do not change the scores
#
# 2. Why create the export manager lazily?
#    - Runs with export=False leave no directories behind
#
# 3. Why skip export when nothing was loaded?
#    - An empty table would overwrite the previous export
