#experiments.py
import os
import time

from .codecs import HuffmanCodecFile
from .coders import HuffmanCoderSettings
from .logger import Logger


class HuffmanFileExperiment:
    def __init__(self, name: str, input_file_path, experiment_root_folder_path, framed=True, settings=None):

        self.name = name

        #validate that input file exists and can be read
        if not os.path.exists(input_file_path):
            raise FileNotFoundError(f"File {input_file_path} not found.")
        if not os.access(input_file_path, os.R_OK):
            raise PermissionError(f"File {input_file_path} is not readable.")

        self.input_file_path = input_file_path

        #attempt to create experiment folder
        self.experiment_folder_path = os.path.join(experiment_root_folder_path, name)
        if not os.path.exists(self.experiment_folder_path):
            os.makedirs(self.experiment_folder_path)

        input_file_name = os.path.basename(input_file_path)
        self.compressed_file_path = os.path.join(self.experiment_folder_path, f"{input_file_name}.huff")
        self.decompressed_file_path = os.path.join(self.experiment_folder_path, f"{input_file_name}_decompressed")

        self.compression_logger = Logger()
        self.decompression_logger = Logger()
        self.settings = settings if settings is not None else HuffmanCoderSettings()
        self.framed = framed

    def run(self):
        self.input_file_size = os.path.getsize(self.input_file_path)

        codec = HuffmanCodecFile(self.settings, self.compression_logger)
        self.compression_start_time = time.time()
        codec.compress(self.input_file_path, self.compressed_file_path, self.framed)
        self.compression_end_time = time.time()

        codec = HuffmanCodecFile(self.settings, self.decompression_logger)
        self.decompression_start_time = time.time()
        codec.decompress(self.compressed_file_path, self.decompressed_file_path)
        self.decompression_end_time = time.time()

        self.compressed_file_size = os.path.getsize(self.compressed_file_path)
        self.decompressed_file_size = os.path.getsize(self.decompressed_file_path)

        self.compression_time = self.compression_end_time - self.compression_start_time
        self.decompression_time = self.decompression_end_time - self.decompression_start_time
        self.compression_ratio = self.input_file_size / self.compressed_file_size
        self.space_saving = (1 - self.compressed_file_size / self.input_file_size) * 100

        with open(self.input_file_path, 'rb') as f:
            original = f.read()
        with open(self.decompressed_file_path, 'rb') as f:
            self.integrity_preserved = f.read() == original

        self.compression_logger.save(os.path.join(self.experiment_folder_path, "compression.log"))
        self.decompression_logger.save(os.path.join(self.experiment_folder_path, "decompression.log"))

    def summary(self):
        return (
            f"Experiment: {self.name}\n"
            f"Original size: {self.input_file_size} bytes\n"
            f"Compressed size: {self.compressed_file_size} bytes\n"
            f"Decompressed size: {self.decompressed_file_size} bytes\n"
            f"Compression ratio: {self.compression_ratio:.3f}\n"
            f"Space saving: {self.space_saving:.2f}%\n"
            f"Compression time: {self.compression_time * 1000:.2f} ms\n"
            f"Decompression time: {self.decompression_time * 1000:.2f} ms\n"
            f"Data integrity preserved: {self.integrity_preserved}"
        )
