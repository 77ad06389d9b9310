VERBOSE_BEGIN = "\n================ Begin Of Verbose Output ==================="
VERBOSE_END = "\n================ End Of Verbose Output ====================="
RESULT_BEGIN = "\n=============== Begin Of Statistic Result ==================="
RESULT_END = "\n=============== End Of Statistic Result ===================="


def format_statistic(idx, stat) -> str:
    return (
        f"ID: {idx:3d} Server: {stat.server:<15s} "
        f"HitCount: {stat.hit_count:<8d} HitRate: {stat.hit_rate:0.3f}"
    )


def format_report(stats):
    """Renders the statistics table, banners included, as a list of lines."""
    lines = [RESULT_BEGIN]
    lines.extend(format_statistic(idx, s) for idx, s in enumerate(stats))
    lines.append(RESULT_END)
    return lines
