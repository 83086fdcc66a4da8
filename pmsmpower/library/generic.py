from pmsmpower.components.motor import *
from pmsmpower.components.controller import *


def define_lossless(**kwargs):
	"""Mid-size direct drive machine, with copper loss only

	The characteristic current of this machine lies within its phase current limit,
	so it can produce torque at any speed
	"""
	params = MotorParams(
		Ld=300e-6,
		Lq=300e-6,
		Rs=50e-3,
		flux_linkage=50e-3,		# 1.125 Nm/A
		num_pole_pairs=15,
		modulation_limit=0.95 * commutation['svpwm'],
		phase_current_cmd_limit=200,
		iq_cmd_lower_limit=-250,
		iq_cmd_upper_limit=250,
	)
	return params.replace(**kwargs)


def define_direct_drive(**kwargs):
	"""The lossless machine, with representative motor and inverter losses"""
	return define_lossless(
		switching_frequency=20e3,
		specific_switching_loss=5e-8,	# ~80 W at 400 V and 100 A
		fixed_loss_sq_coeff=1e-10,
		fixed_loss_lin_coeff=1e-8,
		rds_on=5e-3,
		omega_loss_coefficient_cubic=1e-5,
		omega_loss_coefficient_sq=1e-3,
		omega_loss_coefficient_lin=0.5,
		hysteresis_loss_coefficient=1e-6,
	).replace(**kwargs)
