import os
import tempfile

from huffcodec.codecs import HuffmanTextCodec
from huffcodec.experiments import HuffmanFileExperiment
from huffcodec.logger import Logger
from huffcodec.performance_display import PerformanceDisplay

lorem_ipsum_1par = "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Donec a consectetur ligula. Nunc erat dolor, tristique sed sagittis quis, dignissim eget erat. Vivamus enim lorem, finibus sit amet maximus eget, condimentum sit amet massa. Fusce aliquet velit sit amet ex pretium, ut tincidunt dolor semper. Nulla pellentesque eget massa quis rhoncus. Curabitur maximus quis mauris vel sollicitudin. Integer tristique ut nisl sed consequat. Donec a ipsum ut sem cursus ullamcorper. Sed finibus, sapien id volutpat tempus, turpis odio placerat purus, sit amet scelerisque nibh sem a magna. Sed justo sem, facilisis at imperdiet eu, tincidunt vel quam. Ut id sollicitudin eros, sit amet bibendum tortor. Lorem ipsum dolor sit amet, consectetur adipiscing elit."

def main():
    print(f"Size of original data: {len(lorem_ipsum_1par)}")

    logger = Logger()
    codec = HuffmanTextCodec(logger=logger)
    encoded = codec.encode(lorem_ipsum_1par)
    print(f"Size of compressed data: {encoded.encoded_length}")
    print(encoded.tree_rendering)

    decoded = codec.decode(encoded.wire_format)
    print(f"Size of decompressed data: {decoded.decoded_length}")

    if decoded.data == lorem_ipsum_1par:
        print("Data integrity preserved.")
    else:
        print("Data integrity compromised.")

    pm = PerformanceDisplay(logger.logs)
    print(f"Average code length: {pm.average_code_length():.3f} bits")
    pm.generate_code_length_plot(show_graph=True)
    pm.generate_frequency_plot(show_graph=True)

    with tempfile.TemporaryDirectory() as root:
        input_path = os.path.join(root, "lorem.txt")
        with open(input_path, "w") as f:
            f.write(lorem_ipsum_1par)
        experiment = HuffmanFileExperiment("lorem_ipsum", input_path, root)
        experiment.run()
        print(experiment.summary())

if __name__ == "__main__":
    main()
