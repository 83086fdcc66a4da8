import numpy as np

from pmsmpower.utils import *
from pmsmpower.components.motor import MotorParams


def controller_loss(voltage, peak_phase_current_sq, params: MotorParams):
	"""Inverter semiconductor loss in W; negative by convention

	Parameters
	----------
	voltage: bus voltage
	peak_phase_current_sq: squared peak phase current
	params: MotorParams

	Notes
	-----
	Ripple current at the switching frequency is not taken into account.
	"""
	# conduction; 3 phases, with synchronous switching one leg of each half bridge is always conducting
	conduction_loss = -1.5 * peak_phase_current_sq * params.rds_on

	# commutation loss, proportional to bus voltage times average phase current
	variable_switching_loss_per_cycle = \
		-(3 * 2 / np.pi * voltage * np.sqrt(peak_phase_current_sq) * params.specific_switching_loss)

	# output capacitance loss; capacitance drops with voltage, linearized over the operating range
	fixed_switching_loss_per_cycle = \
		-3 * (params.fixed_loss_sq_coeff * voltage + params.fixed_loss_lin_coeff) * voltage

	return conduction_loss + params.switching_frequency * (
		variable_switching_loss_per_cycle + fixed_switching_loss_per_cycle)


# modulation limit per commutation scheme, as a fraction of V / sqrt(3)
commutation = {
	'svpwm': 1.0,				# inscribed circle of the switching hexagon
	'thi': 1.0,					# third harmonic injection reaches the same circle
	'sine': np.sqrt(3) / 2,		# V / 2 phase amplitude
}
