import json
import logging
import click
from pathlib import Path

from snark2move.core.errors import ConversionError
from snark2move.pipeline import ConverterConfig, DEFAULT_MODULE_PATH, DEFAULT_TEMPLATE_DIR, build_expressions, run
from snark2move.template.staging import STAGERS


def artifact_options(f):
    f = click.option("--vk", "vk_path", envvar="IN_VK_PATH", type=click.Path(dir_okay=False),
                     help="snarkjs verification_key.json [env: IN_VK_PATH]")(f)
    f = click.option("--public-input", "public_input_path", envvar="IN_PUBLIC_INPUT_PATH",
                     type=click.Path(dir_okay=False), help="snarkjs public.json [env: IN_PUBLIC_INPUT_PATH]")(f)
    f = click.option("--proof", "proof_path", envvar="IN_PROOF_PATH", type=click.Path(dir_okay=False),
                     help="snarkjs proof.json [env: IN_PROOF_PATH]")(f)
    f = click.option("--check-on-curve/--no-check-on-curve", default=False, show_default=True,
                     help="Reject points that are not on the BN254 curve / twist")(f)
    f = click.option("--check-arity/--no-check-arity", default=False, show_default=True,
                     help="Require len(IC) == number of public inputs + 1")(f)
    return f


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(verbose):
    """snark2move command line interface"""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="convert")
@artifact_options
@click.option("--out-dir", envvar="OUT_DIR", type=click.Path(file_okay=False),
              help="Output Move package directory [env: OUT_DIR]")
@click.option("--template-dir", default=str(DEFAULT_TEMPLATE_DIR), type=click.Path(file_okay=False),
              help="Move package template to stage from [default: bundled template]")
@click.option("--module-path", default=DEFAULT_MODULE_PATH, show_default=True,
              help="Module to populate, relative to --out-dir")
@click.option("--stager", type=click.Choice(sorted(STAGERS)), default="rsync", show_default=True)
def convert_cmd(vk_path, public_input_path, proof_path, check_on_curve, check_arity,
                out_dir, template_dir, module_path, stager):
    """Stage the template package and populate its Groth16 verifier module."""
    config = ConverterConfig(
        verification_key_path=Path(vk_path) if vk_path else None,
        public_input_path=Path(public_input_path) if public_input_path else None,
        proof_path=Path(proof_path) if proof_path else None,
        output_dir=Path(out_dir) if out_dir else None,
        template_dir=Path(template_dir),
        module_path=module_path,
        check_on_curve=check_on_curve,
        check_arity=check_arity,
    )
    try:
        module = run(config, STAGERS[stager]())
    except ConversionError as e:
        raise click.ClickException(str(e))
    click.echo(str(module))


@cli.command(name="inspect")
@artifact_options
def inspect_cmd(vk_path, public_input_path, proof_path, check_on_curve, check_arity):
    """Print the nine Move expressions as JSON without writing anything."""
    config = ConverterConfig(
        verification_key_path=Path(vk_path) if vk_path else None,
        public_input_path=Path(public_input_path) if public_input_path else None,
        proof_path=Path(proof_path) if proof_path else None,
        output_dir=Path("."),
        check_on_curve=check_on_curve,
        check_arity=check_arity,
    )
    try:
        exprs = build_expressions(config)
    except ConversionError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps(exprs, indent=2))


def main():
    cli()


if __name__ == "__main__":
    main()
