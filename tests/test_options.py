import pytest

from nachoskit.options import (
    MAX_EXEC_FILES,
    KernelOptions,
    MainOptions,
    OptionError,
    kernel_usage,
    main_usage,
    parse_kernel_args,
    parse_main_args,
)


def test_kernel_defaults():
    options = parse_kernel_args([])
    assert options == KernelOptions()
    assert options.reliability == 1.0
    assert options.host_name == 0
    assert options.console_in is None


def test_kernel_random_seed_enables_random_slice():
    options = parse_kernel_args(["-rs", "7"])
    assert options.random_slice is True
    assert options.random_seed == 7


def test_kernel_console_files_and_flags():
    options = parse_kernel_args(["-ci", "in.txt", "-co", "out.txt", "-s", "-f", "-u"])
    assert options.console_in == "in.txt"
    assert options.console_out == "out.txt"
    assert options.debug_user_prog is True
    assert options.format_disk is True
    assert options.show_usage is True


def test_kernel_network_settings():
    options = parse_kernel_args(["-n", "0.5", "-m", "1"])
    assert options.reliability == 0.5
    assert options.host_name == 1


def test_kernel_numbers_read_leniently():
    options = parse_kernel_args(["-m", "3abc", "-n", "oops"])
    assert options.host_name == 3
    assert options.reliability == 0.0


def test_kernel_exec_files_keep_order():
    options = parse_kernel_args(["-e", "../test/a", "-e", "../test/b"])
    assert options.exec_files == ("../test/a", "../test/b")


def test_kernel_exec_files_limit():
    argv = []
    for index in range(MAX_EXEC_FILES + 1):
        argv += ["-e", f"prog{index}"]
    with pytest.raises(OptionError):
        parse_kernel_args(argv)


def test_kernel_ignores_driver_flags():
    options = parse_kernel_args(["-x", "prog", "-K", "-d", "t"])
    assert options == KernelOptions()


@pytest.mark.parametrize("flag", ["-rs", "-e", "-ci", "-co", "-n", "-m"])
def test_kernel_missing_value(flag):
    with pytest.raises(OptionError):
        parse_kernel_args([flag])


def test_main_defaults():
    options = parse_main_args([])
    assert options == MainOptions()
    assert options.debug_flags == ""


def test_main_all_flags():
    options = parse_main_args(
        ["-d", "+", "-z", "-x", "halt", "-K", "-C", "-N", "-l", "-D", "-u"]
    )
    assert options.debug_flags == "+"
    assert options.show_copyright is True
    assert options.user_prog == "halt"
    assert options.thread_test and options.console_test and options.network_test
    assert options.list_directory and options.dump_filesystem
    assert options.show_usage is True


def test_main_file_operations():
    options = parse_main_args(["-cp", "unix.txt", "nachos.txt", "-p", "f1", "-r", "f2"])
    assert options.copy_unix_file == "unix.txt"
    assert options.copy_nachos_file == "nachos.txt"
    assert options.print_file == "f1"
    assert options.remove_file == "f2"


def test_main_ignores_kernel_flags():
    options = parse_main_args(["-s", "-f", "-m"])
    assert options == MainOptions()


@pytest.mark.parametrize("argv", [["-d"], ["-x"], ["-p"], ["-r"], ["-cp"], ["-cp", "only"]])
def test_main_missing_value(argv):
    with pytest.raises(OptionError):
        parse_main_args(argv)


def test_same_argv_serves_both_parsers():
    argv = ["-d", "t", "-e", "prog", "-m", "1", "-K"]
    kernel = parse_kernel_args(argv)
    driver = parse_main_args(argv)
    assert kernel.exec_files == ("prog",)
    assert kernel.host_name == 1
    assert driver.debug_flags == "t"
    assert driver.thread_test is True


def test_kernel_usage_text():
    lines = kernel_usage().splitlines()
    assert lines[0] == "Partial usage: nachos [-rs randomSeed]"
    assert "Partial usage: nachos [-n #] [-m #]" in lines
    assert all(line.startswith("Partial usage: nachos ") for line in lines)


def test_main_usage_text():
    lines = main_usage().splitlines()
    assert lines[0] == "Partial usage: nachos [-z -d debugFlags]"
    assert "Partial usage: nachos [-cp UnixFile NachosFile]" in lines
    assert all(line.startswith("Partial usage: nachos ") for line in lines)