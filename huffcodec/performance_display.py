import matplotlib.pyplot as plt
import numpy as np

from .logger import SymbolCodeLog

class PerformanceDisplay:
    def __init__(self, logs,
                 fig_size=(10, 6), dpi=100, font_size=12,
                 dot_size=20, dot_alpha=0.6,
                 dot_color='blue',
                 trend_line_color='red', trend_line_linewidth=2):
        self.logs = logs
        self.fig_size = fig_size
        self.dpi = dpi
        self.font_size = font_size
        self.dot_size = dot_size
        self.dot_alpha = dot_alpha
        self.dot_color = dot_color
        self.trend_line_color = trend_line_color
        self.trend_line_linewidth = trend_line_linewidth

    def _code_logs(self):
        return [log for log in self.logs if isinstance(log, SymbolCodeLog)]

    def _finish(self, title, xlabel, ylabel, show_graph, save_path):
        plt.title(title, fontsize=self.font_size + 2)
        plt.xlabel(xlabel, fontsize=self.font_size)
        plt.ylabel(ylabel, fontsize=self.font_size)
        plt.grid(True)
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path)
        if show_graph:
            plt.show()
        plt.close()

    def generate_code_length_plot(self, show_graph=False, save_path=None):
        """Bar chart of the code length assigned to every symbol."""
        code_logs = self._code_logs()
        if not code_logs:
            print("No data available for Code Lengths.")
            return False

        labels = [log.symbol.display() for log in code_logs]
        lengths = np.array([log.code_length for log in code_logs])

        plt.figure(figsize=self.fig_size, dpi=self.dpi)
        plt.bar(np.arange(len(lengths)), lengths, color=self.dot_color, alpha=self.dot_alpha)
        plt.xticks(np.arange(len(lengths)), labels, fontsize=max(self.font_size - 4, 6))
        self._finish("Code Length per Symbol", "Symbol", "Code length (bits)", show_graph, save_path)
        return True

    def generate_frequency_plot(self, show_graph=False, save_path=None):
        """
        Scatter of symbol frequency against code length, with the ideal
        length -log2(p) drawn as a trend line.
        """
        code_logs = self._code_logs()
        if not code_logs:
            print("No data available for Frequency vs Code Length.")
            return False

        freqs = np.array([log.frequency for log in code_logs], dtype=np.float64)
        lengths = np.array([log.code_length for log in code_logs])
        order = np.argsort(freqs)
        ideal = -np.log2(freqs[order] / freqs.sum())

        plt.figure(figsize=self.fig_size, dpi=self.dpi)
        plt.scatter(freqs, lengths, s=self.dot_size, alpha=self.dot_alpha, color=self.dot_color, label="Symbols")
        plt.plot(freqs[order], ideal, color=self.trend_line_color, linewidth=self.trend_line_linewidth, label="-log2(p)")
        plt.xscale('log')
        plt.legend(fontsize=self.font_size)
        self._finish("Frequency vs Code Length", "Frequency", "Code length (bits)", show_graph, save_path)
        return True

    def average_code_length(self):
        """Weighted mean code length in bits per symbol, or None without data."""
        code_logs = self._code_logs()
        if not code_logs:
            return None
        freqs = np.array([log.frequency for log in code_logs], dtype=np.float64)
        lengths = np.array([log.code_length for log in code_logs], dtype=np.float64)
        return float(np.average(lengths, weights=freqs))
