"""
QuorumCal Algorithms Package.

Framework-free algorithms behind the shared availability calendars. Nothing
in here touches the ORM; the Django apps load rows, hand plain objects to
these modules and render the results.

The algorithms are organized into the following subpackages:
- availability: Recurrence expansion, threshold aggregation and time-slot
  segmentation
- dates: Date admissibility (weekdays, public holidays, holiday eves)
"""

__version__ = "1.0.0"
