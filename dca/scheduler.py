"""Investment date selection for periodic DCA purchases."""
import logging

from models.enums import Frequency

logger = logging.getLogger("dcasim.dca.scheduler")


def month_end_samples(points):
    """Latest sample of every calendar month, oldest month first."""
    by_month = {}
    for point in points:
        key = (point.date.year, point.date.month)
        current = by_month.get(key)
        if current is None or point.date > current.date:
            by_month[key] = point
    return sorted(by_month.values(), key=lambda p: p.date)


class InvestmentScheduler:
    def __init__(self, frequency=Frequency.MONTHLY):
        self.frequency = Frequency(frequency)

    def get_investment_dates(self, points):
        """Return the month-end samples on which a DCA purchase happens.

        Every Nth month-end is kept starting from the earliest one, where N is
        1, 3 or 12 for monthly, quarterly and yearly. An empty series gives an
        empty schedule; a series shorter than one interval gives exactly one
        date.
        """
        month_ends = month_end_samples(points)
        interval = self.frequency.months
        selected = tuple(month_ends[i] for i in range(0, len(month_ends), interval))
        logger.debug(f"{len(selected)} {self.frequency.value} investment dates "
                     f"from {len(month_ends)} month-ends")
        return selected


def get_investment_dates(points, frequency):
    return InvestmentScheduler(frequency).get_investment_dates(points)
