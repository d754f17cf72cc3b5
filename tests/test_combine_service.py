import os

from magmerge.app_services.combine_service import (
    combine_folder,
    combine_folder_with_progress,
    output_path_for,
)
from magmerge.domain.models import (
    Category,
    CombineProgress,
    DiscoveryProgress,
    collect_errors,
    collect_warnings,
)


def _populate(write_file):
    write_file("Bead Positions 2.txt", "# H\n3\n")
    write_file("Bead Positions 1.txt", "# H\n1\n2\n")
    write_file("Motor Positions 1.txt", "# M\n9\n")
    write_file("Readme.txt", "ignored\n")


def test_combine_folder_writes_both_outputs(folder, write_file, read_bytes):
    _populate(write_file)

    report = combine_folder(folder)

    assert report.folder == folder
    assert report.bead_files == 2
    assert report.motor_files == 1
    assert report.errors == []
    assert report.bead.data_lines == 3
    assert report.motor.data_lines == 1
    assert read_bytes(output_path_for(folder, Category.BEAD)) == b"# H\n1\n2\n3\n"
    assert read_bytes(output_path_for(folder, Category.MOTOR)) == b"# M\n9\n"
    assert report.bead.output_path == os.path.join(folder, "Bead Positions Combined.txt")


def test_empty_folder_has_no_summaries(folder):
    report = combine_folder(folder)

    assert report.bead_files == 0
    assert report.motor_files == 0
    assert report.bead is None
    assert report.motor is None
    assert collect_errors(report) == []


def test_category_without_files_is_not_run(folder, write_file):
    write_file("Motor Positions 1.txt", "1\n")

    report = combine_folder(folder)

    assert report.bead is None
    assert report.motor is not None
    assert not os.path.exists(output_path_for(folder, Category.BEAD))


def test_unreadable_folder_is_a_folder_level_error(folder):
    missing = os.path.join(folder, "missing")

    report = combine_folder(missing)

    assert report.bead_files == 0 and report.motor_files == 0
    assert report.bead is None and report.motor is None
    assert len(report.errors) == 1
    assert report.errors[0].file is None
    assert report.errors[0].message.startswith("Failed to scan folder:")


def test_second_run_ignores_previous_outputs(folder, write_file, read_bytes):
    """Combined outputs are excluded from discovery, so re-running is stable."""
    _populate(write_file)

    first = combine_folder(folder)
    first_content = read_bytes(output_path_for(folder, Category.BEAD))
    second = combine_folder(folder)

    assert (second.bead_files, second.motor_files) == (first.bead_files, first.motor_files)
    assert second.bead.data_lines == first.bead.data_lines
    assert second.motor.data_lines == first.motor.data_lines
    assert read_bytes(output_path_for(folder, Category.BEAD)) == first_content


def test_progress_events_order_and_counts(folder, write_file):
    _populate(write_file)
    events = []

    report = combine_folder_with_progress(folder, events.append)

    discovery = [e for e in events if isinstance(e, DiscoveryProgress)]
    combine = [e for e in events if isinstance(e, CombineProgress)]
    assert events == discovery + combine
    assert discovery[-1] == DiscoveryProgress(bead_files=2, motor_files=1)
    assert [(e.processed_files, e.total_files) for e in combine] == [(1, 3), (2, 3), (3, 3)]
    assert [e.category for e in combine] == [Category.BEAD, Category.BEAD, Category.MOTOR]
    assert [os.path.basename(e.current_file) for e in combine] == [
        "Bead Positions 1.txt",
        "Bead Positions 2.txt",
        "Motor Positions 1.txt",
    ]
    assert report.bead_files + report.motor_files == 3


def test_write_failure_in_one_group_does_not_stop_the_other(folder, write_file, read_bytes):
    write_file("Bead Positions 1.txt", "# H\n1\n")
    write_file("Motor Positions 1.txt", "# M\n2\n")
    # A directory squatting on the bead output name makes creation fail
    os.mkdir(output_path_for(folder, Category.BEAD))

    report = combine_folder(folder)

    assert report.bead_files == 1
    assert report.bead.output_path is None
    assert [e.file for e in report.bead.errors] == [output_path_for(folder, Category.BEAD)]
    assert report.motor.errors == []
    assert read_bytes(output_path_for(folder, Category.MOTOR)) == b"# M\n2\n"
    assert len(collect_errors(report)) == 1


def test_collect_warnings_flattens_groups(folder, write_file):
    b2 = write_file("Bead Positions 2.txt", "# X\n2\n")
    write_file("Bead Positions 1.txt", "# H\n1\n")
    write_file("Motor Positions 1.txt", "# M\n1\n")
    m2 = write_file("Motor Positions 2.txt", "# N\n1\n")

    report = combine_folder(folder)

    assert [w.file for w in collect_warnings(report)] == [b2, m2]
