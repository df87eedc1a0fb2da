from atlas_buildflow.cli import main

main(prog_name="buildflow")
