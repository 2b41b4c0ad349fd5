"""
Reporting: terminal views and file export for a Recommendation.

Modules
-------
formatters : format_recommendation() (full view) + format_one_pager()
             (condensed printable view) + format_option_catalog().
export     : build_recommendation_report() + flatten_recommendation_for_export()
             + export_to_json() + export_to_csv().
"""
