#!/usr/bin/env python3

# See the NOTICE file distributed with this work for additional information
# regarding copyright ownership.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

""" This script loads seq_regions into an Ensembl core database, creating
    the coordinate system they belong to if it does not exist yet.

    It can:
    1) load a seq_region for every entry of a FASTA file,
    2) also store the sequence of every entry in the dna table when the
       coordinate system is sequence level,
    3) load a seq_region for every assembled object of an AGP file.

Examples:
    Load the sequences of contigs:
    load_seq_region --dbhost host --dbuser user --dbname my_db --dbpass ****
        --coord_system_name contig --rank 4 --sequence_level
        --fasta_file sequence.fa

    Only load seq_regions for the clones of a FASTA file:
    load_seq_region --dbhost host --dbuser user --dbname my_db --dbpass ****
        --coord_system_name clone --rank 3 --fasta_file clone.fa

    Load the chromosomes assembled in an AGP file:
    load_seq_region --dbhost host --dbuser user --dbname my_db --dbpass ****
        --coord_system_name chromosome --coord_system_version GRCh38 --rank 1
        --default_version --agp_file genome.agp
"""

from typing import List, Optional
import sys
import logging
import argparse
from sqlalchemy.engine import URL

from ensembl_seq_region.adaptors import (
    SqlCoordSystemAdaptor,
    SqlSliceAdaptor,
    get_engine,
)
from ensembl_seq_region.agp_loader import parse_agp, read_agp
from ensembl_seq_region.coord_system import fetch_or_store_coord_system
from ensembl_seq_region.exceptions import (
    AmbiguousBasesError,
    ConfigurationError,
    SeqRegionLoaderError,
)
from ensembl_seq_region.fasta_loader import parse_fasta, read_fasta
from ensembl_seq_region.names import load_name_file


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="load_seq_region",
        description="Load seq_regions from a FASTA or an AGP file into an Ensembl core database",
    )
    db_group = parser.add_argument_group("database connection")
    db_group.add_argument("--dbhost", "--host", type=str, default="", help="Host name for the database")
    db_group.add_argument("--dbport", "--port", type=int, default=None, help="Port of the database")
    db_group.add_argument("--dbname", "-D", type=str, default="", help="Name of the database")
    db_group.add_argument("--dbuser", "--user", type=str, default="", help="User to connect as")
    db_group.add_argument("--dbpass", "--pass", type=str, default="", help="Password of the user")

    cs_group = parser.add_argument_group("coordinate system")
    cs_group.add_argument(
        "--coord_system_name", type=str, help="The name of the coordinate system being stored"
    )
    cs_group.add_argument(
        "--coord_system_version",
        type=str,
        default=None,
        help="The version of the coordinate system being stored",
    )
    cs_group.add_argument(
        "--default_version",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="This version is the default version of the coordinate system",
    )
    cs_group.add_argument(
        "--rank",
        type=int,
        default=None,
        help="Rank of the coordinate system, 1 for the highest one (e.g. chromosome)."
        " Only one coordinate system can have a given rank",
    )
    cs_group.add_argument(
        "--sequence_level",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Store the sequence of the FASTA file in the dna table. Not valid with --agp_file",
    )

    parser.add_argument("--agp_file", type=str, help="AGP file to parse")
    parser.add_argument(
        "--fasta_file",
        type=str,
        help="FASTA file to parse. The sequence is only stored with --sequence_level",
    )
    parser.add_argument(
        "--regex",
        type=str,
        help="Regular expression whose first group is the seq_region name of a FASTA id",
    )
    parser.add_argument(
        "--name_file",
        type=str,
        help="File with two columns, the name to use and the accession it replaces",
    )
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Print the name of every seq_region and debugging messages",
    )
    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Check the options before anything is read or stored.

    Raises:
        ConfigurationError: listing every problem found.
    """
    errors = []
    if not (args.dbhost and args.dbuser and args.dbname and args.dbpass):
        errors.append(
            "Can't store sequence without database details"
            f" -dbhost {args.dbhost} -dbuser {args.dbuser} -dbname {args.dbname}"
        )
    if not args.coord_system_name:
        errors.append("Need coord_system_name to be able to run")
    if not args.fasta_file and not args.agp_file:
        errors.append("Need a fasta file or an agp file to be able to run")
    if args.fasta_file and args.agp_file:
        errors.append("Only one of fasta file and agp file can be loaded at a time")
    if args.agp_file and args.sequence_level:
        errors.append(
            f"Can't use an agp file {args.agp_file} to store a sequence level"
            f" coordinate system {args.coord_system_name}"
        )
    if args.rank is None or args.rank < 1:
        errors.append("A positive rank for the coordinate system must be specified with --rank")
    if errors:
        raise ConfigurationError("\n".join(errors))


def get_db_url(args: argparse.Namespace) -> URL:
    return URL.create(
        "mysql+pymysql",
        username=args.dbuser,
        password=args.dbpass,
        host=args.dbhost,
        port=args.dbport,
        database=args.dbname,
    )


def load(args: argparse.Namespace) -> None:
    """Create the coordinate system and load the seq_regions of the input file."""
    logger = logging.getLogger("load_seq_region")
    accession_map = load_name_file(args.name_file) if args.name_file else None

    engine = get_engine(get_db_url(args))
    try:
        coord_system = fetch_or_store_coord_system(
            SqlCoordSystemAdaptor(engine),
            args.coord_system_name,
            args.coord_system_version,
            args.rank,
            default=args.default_version,
            sequence_level=args.sequence_level,
        )
        if args.agp_file and coord_system.is_sequence_level:
            raise ConfigurationError(
                f"Can't use an agp file {args.agp_file} to store seq_regions in the"
                f" sequence level coordinate system {coord_system.name}"
            )
        slice_adaptor = SqlSliceAdaptor(engine)

        if args.fasta_file:
            logger.info("Loading seq_regions from %s", args.fasta_file)
            count_ambiguous_bases = parse_fasta(
                read_fasta(args.fasta_file),
                coord_system,
                slice_adaptor,
                args.sequence_level,
                regex=args.regex,
                accession_map=accession_map,
                verbose=args.verbose,
            )
            if count_ambiguous_bases:
                raise AmbiguousBasesError(count_ambiguous_bases)
        else:
            logger.info("Loading seq_regions from %s", args.agp_file)
            parse_agp(read_agp(args.agp_file), coord_system, slice_adaptor, accession_map)
    finally:
        engine.dispose()


def setup_logging(verbose: bool) -> None:
    console_handler = logging.StreamHandler()
    console_format = logging.Formatter(
        "%(asctime)s| %(levelname)s | %(module)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    console_handler.setFormatter(console_format)
    for name in ("load_seq_region", "ensembl_seq_region"):
        logger = logging.getLogger(name)
        logger.handlers = [console_handler]
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def main(argv: Optional[List[str]] = None) -> None:
    """Load seq_regions from a FASTA or AGP file.

    Option problems print the usage and exit with status 2 before connecting
    to the database. A load that stored sequences with ambiguous bases exits
    with status 1 once every sequence has been stored.
    """
    parser = get_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger("load_seq_region")

    try:
        validate_args(args)
    except ConfigurationError as err:
        parser.error(str(err))

    try:
        load(args)
    except SeqRegionLoaderError as err:
        logger.error(err)
        sys.exit(1)


if __name__ == "__main__":
    main()
