"""Chart rendering and session helpers for the visualizer.

Charts in the UI are driven by `ChartConfigDTO` values rather than bespoke view
logic. This package contains the Chart.js rendering, session encoding and
suggestion decoding utilities used by the visualizer views.
"""
